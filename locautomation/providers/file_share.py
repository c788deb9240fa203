"""Localization provider that exchanges portable object files through a shared directory."""

import logging
import shutil
from pathlib import Path
from typing import Iterator, Optional, Tuple

from ..config import config
from ..errors import AutomationError, ProviderError
from ..models.project_info import ProjectImportExportInfo
from .base import LocalizationProvider, LocalizationProviderArgs

logger = logging.getLogger(__name__)


class FileShareProvider(LocalizationProvider):
    """
    Provider backed by a directory that translators (or a sync job) work from.

    Layout: "<share>/<remote name>/<culture>/<po name>", with split platform
    files under "<share>/<remote name>/Platforms/<platform>/<culture>/<po name>".
    """

    name = "FileShare"

    def __init__(self, args: LocalizationProviderArgs, share_root: Optional[str] = None):
        """
        Initialize the provider.

        Args:
            args: Task context
            share_root: Shared directory. If not provided, uses the root carried in
                args, then LOCALIZE_FILE_SHARE_ROOT from environment.
        """
        super().__init__(args)
        share_root = share_root or args.file_share_root or config.file_share_root
        if not share_root:
            raise AutomationError("A file share root is required for the FileShare provider")
        self.share_root = Path(share_root)

    def download_project(self, project_name: str, import_info: ProjectImportExportInfo) -> None:
        remote_root = self.share_root / self.get_remote_name(project_name)
        if not remote_root.is_dir():
            raise ProviderError(f"No translations found for '{project_name}' in {remote_root}")

        downloaded = 0
        for local_path, remote_path in self._iter_file_pairs(remote_root, import_info):
            if not remote_path.is_file():
                continue
            try:
                self._checkout(local_path)
                local_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(remote_path, local_path)
            except OSError as e:
                raise ProviderError(f"Failed to download {remote_path}: {e}") from e
            downloaded += 1

        logger.info("Downloaded %d file(s) for '%s' from %s", downloaded, project_name, remote_root)

    def upload_project(self, project_name: str, export_info: ProjectImportExportInfo) -> None:
        remote_root = self.share_root / self.get_remote_name(project_name)

        uploaded = 0
        for local_path, remote_path in self._iter_file_pairs(remote_root, export_info):
            if not local_path.is_file():
                continue
            try:
                remote_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(local_path, remote_path)
            except OSError as e:
                raise ProviderError(f"Failed to upload {local_path}: {e}") from e
            uploaded += 1

        logger.info("Uploaded %d file(s) for '%s' to %s", uploaded, project_name, remote_root)

    def _iter_file_pairs(
        self, remote_root: Path, info: ProjectImportExportInfo
    ) -> Iterator[Tuple[Path, Path]]:
        """Yield (local path, remote path) for every culture and split platform."""
        root = self.args.root_target_directory
        for culture in info.cultures_to_generate:
            yield (
                info.get_portable_object_path(root, culture),
                remote_root / culture / info.portable_object_name,
            )
            for platform_name, local_path in info.split_platform_paths.get(culture, {}).items():
                yield (
                    local_path,
                    remote_root / "Platforms" / platform_name / culture / info.portable_object_name,
                )

    def _checkout(self, local_path: Path) -> None:
        """Open an existing file for edit in the pending change before overwriting it."""
        source_control = self.args.source_control
        if source_control is None or self.args.pending_changelist is None or not local_path.is_file():
            return
        source_control.edit(self.args.pending_changelist, str(local_path))
