"""Base class for localization providers (remote translation services)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..models.project_info import ProjectImportExportInfo
from ..source_control.base import SourceControl


@dataclass
class LocalizationProviderArgs:
    """Context a provider is created with, one per localization task."""

    root_working_directory: Path
    root_target_directory: Path
    remote_filename_prefix: str = ""
    branch_suffix: str = ""
    source_control: Optional[SourceControl] = None
    pending_changelist: Optional[int] = None
    # Shared directory used by the FileShare provider
    file_share_root: str = ""


class LocalizationProvider(ABC):
    """Downloads translations from, and uploads sources to, a translation service."""

    name = ""

    def __init__(self, args: LocalizationProviderArgs):
        self.args = args

    def get_remote_name(self, project_name: str) -> str:
        """Get the name a project is stored under on the provider."""
        parts = [self.args.remote_filename_prefix, project_name, self.args.branch_suffix]
        return "_".join(part for part in parts if part)

    @abstractmethod
    def download_project(self, project_name: str, import_info: ProjectImportExportInfo) -> None:
        """
        Download the latest translations for a project.

        Raises:
            ProviderError: If the download failed
        """

    @abstractmethod
    def upload_project(self, project_name: str, export_info: ProjectImportExportInfo) -> None:
        """
        Upload the latest sources for a project.

        Raises:
            ProviderError: If the upload failed
        """
