"""Resolves the steps and settings of localization projects."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..errors import MissingConfigFileError, MissingConfigKeyError
from ..models.project_info import ProjectImportExportInfo, ProjectInfo, ProjectStepInfo
from ..models.steps import MODULAR_CONFIG_STEPS, LocalizationStep, is_config_required
from .ini_parser import LocalizationConfigParser

logger = logging.getLogger(__name__)

COMMON_SETTINGS_SECTION = "CommonSettings"
CONFIG_DIRECTORY = Path("Config") / "Localization"


def get_config_directory(target_directory: Path) -> Path:
    """Get the directory holding the localization configs of a target."""
    return Path(target_directory) / CONFIG_DIRECTORY


class ProjectResolver:
    """
    Builds ProjectInfo objects from the configs found on disk.

    Projects generated by the localization dashboard use one config file per
    step, which must run in a fixed order. Older projects use a single
    monolithic config containing every step. The kind of project is decided
    by which files exist.
    """

    def __init__(self, parser: Optional[LocalizationConfigParser] = None):
        self.parser = parser or LocalizationConfigParser()

    def resolve(
        self,
        target_directory: Path,
        project_name: str,
        requested_steps: Iterable[LocalizationStep],
    ) -> ProjectInfo:
        """
        Resolve a single localization project.

        Args:
            target_directory: Root directory of the localization target
            project_name: Name of the localization project
            requested_steps: Steps requested for this run

        Returns:
            ProjectInfo with its steps and import/export settings

        Raises:
            MissingConfigFileError: If a config required by the requested steps is missing
            MissingConfigKeyError: If a config lacks a required settings key
        """
        target_directory = Path(target_directory)
        requested_steps = set(requested_steps)
        config_directory = get_config_directory(target_directory)

        monolithic_config = config_directory / f"{project_name}.ini"
        if monolithic_config.is_file():
            logger.debug("Using monolithic config for '%s': %s", project_name, monolithic_config)
            info = self.load_import_export_info(target_directory, monolithic_config)
            return ProjectInfo(
                project_name=project_name,
                steps=[ProjectStepInfo(LocalizationStep.MONOLITHIC, monolithic_config)],
                import_info=info,
                export_info=info,
            )

        project = ProjectInfo(project_name=project_name)

        for step in MODULAR_CONFIG_STEPS:
            modular_config = config_directory / f"{project_name}_{step.value}.ini"

            if not modular_config.is_file():
                if is_config_required(step, requested_steps):
                    raise MissingConfigFileError(modular_config)
                continue

            project.steps.append(ProjectStepInfo(step, modular_config))

            if step == LocalizationStep.IMPORT:
                project.import_info = self.load_import_export_info(target_directory, modular_config)
            elif step == LocalizationStep.EXPORT:
                project.export_info = self.load_import_export_info(target_directory, modular_config)

        return project

    def load_import_export_info(self, target_directory: Path, config_file: Path) -> ProjectImportExportInfo:
        """
        Parse the common settings of a config file.

        Args:
            target_directory: Root directory of the localization target
            config_file: Config file to read

        Returns:
            ProjectImportExportInfo with split platform paths already calculated
        """
        parsed = self.parser.parse(config_file)

        def required_string(key: str) -> str:
            value = parsed.get_string(COMMON_SETTINGS_SECTION, key)
            if value is None:
                raise MissingConfigKeyError(COMMON_SETTINGS_SECTION, key, config_file)
            return value

        settings = {
            key: required_string(key)
            for key in ("DestinationPath", "ManifestName", "ArchiveName", "PortableObjectName", "NativeCulture")
        }

        cultures = parsed.get_array(COMMON_SETTINGS_SECTION, "CulturesToGenerate")
        if cultures is None:
            raise MissingConfigKeyError(COMMON_SETTINGS_SECTION, "CulturesToGenerate", config_file)

        # bUseCultureDirectory is optional, default is true
        use_culture_directory = parsed.get_bool(COMMON_SETTINGS_SECTION, "bUseCultureDirectory")
        if use_culture_directory is None:
            use_culture_directory = True

        info = ProjectImportExportInfo(
            destination_path=settings["DestinationPath"],
            manifest_name=settings["ManifestName"],
            archive_name=settings["ArchiveName"],
            portable_object_name=settings["PortableObjectName"],
            native_culture=settings["NativeCulture"],
            cultures_to_generate=cultures,
            use_culture_directory=use_culture_directory,
        )
        info.calculate_split_platform_paths(target_directory)
        return info
