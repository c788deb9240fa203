"""Data models for resolved localization projects."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .steps import LocalizationStep

PROJECT_ROOT_TOKEN = "%LOCPROJECTROOT%"


@dataclass(frozen=True)
class ProjectStepInfo:
    """A pipeline step paired with the config file that implements it."""

    name: LocalizationStep
    config_file: Path


@dataclass
class ProjectImportExportInfo:
    """Import or export settings parsed from a localization config file."""

    destination_path: str
    manifest_name: str
    archive_name: str
    portable_object_name: str
    native_culture: str
    cultures_to_generate: List[str]
    use_culture_directory: bool = True
    # Platform names found under "<destination>/Platforms"
    split_platform_names: List[str] = field(default_factory=list)
    # Culture -> per-platform portable object paths
    split_platform_paths: Dict[str, Dict[str, Path]] = field(default_factory=dict)

    def resolve_destination(self, root_directory: Path) -> Path:
        """Get the absolute destination directory for a localization target."""
        destination = self.destination_path
        if PROJECT_ROOT_TOKEN in destination:
            destination = destination.replace(PROJECT_ROOT_TOKEN, "").lstrip("/\\")
        return Path(root_directory) / destination

    def get_portable_object_path(self, root_directory: Path, culture: str) -> Path:
        """Get the path of the portable object file for a culture."""
        destination = self.resolve_destination(root_directory)
        if self.use_culture_directory:
            return destination / culture / self.portable_object_name
        return destination / self.portable_object_name

    def calculate_split_platform_paths(self, root_directory: Path) -> None:
        """
        Recompute the per-platform portable object paths.

        Export can create or remove platform sub-folders, so this must be
        called again after an export before the paths are trusted.

        Args:
            root_directory: Localization target directory the destination is relative to
        """
        platforms_directory = self.resolve_destination(root_directory) / "Platforms"

        self.split_platform_names = []
        if platforms_directory.is_dir():
            self.split_platform_names = sorted(
                entry.name for entry in platforms_directory.iterdir() if entry.is_dir()
            )

        self.split_platform_paths = {}
        for culture in self.cultures_to_generate:
            paths = {}
            for platform_name in self.split_platform_names:
                platform_directory = platforms_directory / platform_name
                if self.use_culture_directory:
                    platform_directory = platform_directory / culture
                paths[platform_name] = platform_directory / self.portable_object_name
            self.split_platform_paths[culture] = paths


@dataclass
class ProjectInfo:
    """A localization project with its resolved steps and settings.

    For monolithic configs ``import_info`` and ``export_info`` are the same object.
    """

    project_name: str
    steps: List[ProjectStepInfo] = field(default_factory=list)
    import_info: Optional[ProjectImportExportInfo] = None
    export_info: Optional[ProjectImportExportInfo] = None

    @property
    def is_monolithic(self) -> bool:
        return any(step.name == LocalizationStep.MONOLITHIC for step in self.steps)

    def get_config_files(self, requested_steps) -> List[Path]:
        """Get the config files of the steps in ``requested_steps``, in run order."""
        return [step.config_file for step in self.steps if step.name in requested_steps]
