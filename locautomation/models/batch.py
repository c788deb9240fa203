"""Data models for localization batches and the tasks that run them."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

from .project_info import ProjectInfo

if TYPE_CHECKING:
    from ..execution.process import CommandletProcess
    from ..providers.base import LocalizationProvider


@dataclass(frozen=True)
class LocalizationBatch:
    """A set of localization projects sharing one working/target directory pair.

    Directories are relative to the project root and use forward slashes.
    """

    project_directory: str
    target_directory: str
    remote_filename_prefix: str
    project_names: Tuple[str, ...]


@dataclass
class LocalizationTask:
    """Runtime state for processing one batch."""

    batch: LocalizationBatch
    root_working_directory: Path
    root_target_directory: Path
    provider: Optional["LocalizationProvider"] = None
    project_infos: List[ProjectInfo] = field(default_factory=list)
    # One slot per project info, None when no commandlet was run for it
    process_results: List[Optional["CommandletProcess"]] = field(default_factory=list)

    @classmethod
    def from_batch(cls, batch: LocalizationBatch, project_root: Path) -> "LocalizationTask":
        """Create a task with directories resolved against the project root."""
        project_root = Path(project_root)
        return cls(
            batch=batch,
            root_working_directory=project_root / batch.project_directory,
            root_target_directory=project_root / batch.target_directory,
        )

    def dispose_processes(self) -> None:
        """Release every process handle held by this task."""
        for process in self.process_results:
            if process is not None:
                process.dispose()
