"""Data models for the localization pipeline."""

from .steps import (
    LocalizationStep,
    PUBLIC_STEPS,
    MODULAR_CONFIG_STEPS,
    REQUIRED_CONFIG_TRIGGERS,
    IMPLIED_CONFIG_STEPS,
    is_config_required,
    parse_step_names,
    with_implicit_steps,
)
from .project_info import ProjectStepInfo, ProjectImportExportInfo, ProjectInfo
from .batch import LocalizationBatch, LocalizationTask

__all__ = [
    "LocalizationStep",
    "PUBLIC_STEPS",
    "MODULAR_CONFIG_STEPS",
    "REQUIRED_CONFIG_TRIGGERS",
    "IMPLIED_CONFIG_STEPS",
    "is_config_required",
    "parse_step_names",
    "with_implicit_steps",
    "ProjectStepInfo",
    "ProjectImportExportInfo",
    "ProjectInfo",
    "LocalizationBatch",
    "LocalizationTask",
]
