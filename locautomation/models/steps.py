"""Localization step vocabulary and the config files each step depends on."""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Set

from ..errors import UnknownStepError


class LocalizationStep(str, Enum):
    """A named stage of the localization pipeline."""

    DOWNLOAD = "Download"
    GATHER = "Gather"
    IMPORT = "Import"
    EXPORT = "Export"
    COMPILE = "Compile"
    GENERATE_REPORTS = "GenerateReports"
    UPLOAD = "Upload"
    # Single config file that performs an unknown subset of the steps above
    MONOLITHIC = "Monolithic"


# Steps a caller may request, in pipeline order
PUBLIC_STEPS = (
    LocalizationStep.DOWNLOAD,
    LocalizationStep.GATHER,
    LocalizationStep.IMPORT,
    LocalizationStep.EXPORT,
    LocalizationStep.COMPILE,
    LocalizationStep.GENERATE_REPORTS,
    LocalizationStep.UPLOAD,
)

# Steps backed by a "<project>_<Step>.ini" file, in the order they must run
MODULAR_CONFIG_STEPS = (
    LocalizationStep.GATHER,
    LocalizationStep.IMPORT,
    LocalizationStep.EXPORT,
    LocalizationStep.COMPILE,
    LocalizationStep.GENERATE_REPORTS,
)

# Config step -> requested steps that make its config file mandatory.
# Download needs the parsed import settings, Upload the parsed export settings.
REQUIRED_CONFIG_TRIGGERS: Dict[LocalizationStep, FrozenSet[LocalizationStep]] = {
    LocalizationStep.GATHER: frozenset({LocalizationStep.GATHER}),
    LocalizationStep.IMPORT: frozenset({LocalizationStep.IMPORT, LocalizationStep.DOWNLOAD}),
    LocalizationStep.EXPORT: frozenset({LocalizationStep.GATHER, LocalizationStep.UPLOAD}),
    LocalizationStep.COMPILE: frozenset({LocalizationStep.COMPILE}),
    LocalizationStep.GENERATE_REPORTS: frozenset(),
}

# Requested step -> config steps that run with it.
# Upload sends the export output, so the export config runs first.
IMPLIED_CONFIG_STEPS: Dict[LocalizationStep, FrozenSet[LocalizationStep]] = {
    LocalizationStep.UPLOAD: frozenset({LocalizationStep.EXPORT}),
}


def is_config_required(config_step: LocalizationStep, requested: Iterable[LocalizationStep]) -> bool:
    """Check whether the config file for a modular step must exist for this request."""
    return bool(REQUIRED_CONFIG_TRIGGERS[config_step] & set(requested))


def parse_step_names(value: Optional[str]) -> Set[LocalizationStep]:
    """
    Parse a comma-separated list of step names.

    Args:
        value: Step names such as "Gather, Export". None selects every public step.

    Returns:
        Set of requested steps (without any implicit steps)

    Raises:
        UnknownStepError: If a name is not part of the step vocabulary
    """
    if value is None:
        return set(PUBLIC_STEPS)

    steps = set()
    for name in value.split(","):
        name = name.strip()
        if not name:
            continue
        try:
            steps.add(LocalizationStep(name))
        except ValueError:
            raise UnknownStepError(name) from None
    return steps


def with_implicit_steps(requested: Iterable[LocalizationStep]) -> Set[LocalizationStep]:
    """
    Expand a request with the steps it implies.

    Monolithic configs are always allowed to run since there is no way to know
    which steps they perform. Upload also runs the export config so the
    uploaded files are current. Other steps whose config file must exist
    (such as Export for Gather) are only checked for, not run.
    """
    steps = set(requested)
    for step in list(steps):
        steps |= IMPLIED_CONFIG_STEPS.get(step, frozenset())
    steps.add(LocalizationStep.MONOLITHIC)
    return steps
