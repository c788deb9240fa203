"""Exceptions raised by the localization automation pipeline."""

from typing import Optional


class AutomationError(Exception):
    """Base class for fatal errors that abort a localization run."""


class MissingConfigFileError(AutomationError):
    """A config file required by the requested steps does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Failed to find a required config file! '{path}'")


class MissingConfigKeyError(AutomationError):
    """A required key is missing from a localization config file."""

    def __init__(self, section: str, key: str, path):
        self.section = section
        self.key = key
        self.path = path
        super().__init__(
            f"Failed to find a required config key! Section: '{section}', Key: '{key}', File: '{path}'"
        )


class UnknownStepError(AutomationError):
    """A requested localization step is not part of the step vocabulary."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown localization step: '{name}'")


class UnknownProviderError(AutomationError):
    """No localization provider is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown localization provider: '{name}'")


class SourceControlError(AutomationError):
    """A source control command exited with a failure."""

    def __init__(self, command: str, exit_code: int, output: Optional[str] = None):
        self.command = command
        self.exit_code = exit_code
        self.output = output or ""
        message = f"Source control command '{command}' failed with exit code {exit_code}"
        if self.output:
            message += f": {self.output.strip()}"
        super().__init__(message)


class ProviderError(Exception):
    """A localization provider failed to download or upload a project.

    Not an AutomationError: provider failures are reported per project
    and never abort the run.
    """
