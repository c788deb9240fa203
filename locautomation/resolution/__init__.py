"""Localization config reading and project step resolution."""

from .ini_parser import LocalizationConfig, LocalizationConfigParser
from .project_resolver import ProjectResolver, get_config_directory

__all__ = ["LocalizationConfig", "LocalizationConfigParser", "ProjectResolver", "get_config_directory"]
