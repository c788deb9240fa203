"""Lifecycle of the single pending changelist shared by a localization run."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from ..models.batch import LocalizationBatch
from ..source_control.base import SourceControl

logger = logging.getLogger(__name__)


class ChangelistState(str, Enum):
    """Changelist state enum."""
    PENDING = "pending"
    CREATED = "created"
    SYNCED = "synced"
    EDITED = "edited"
    POPULATED = "populated"
    RECONCILED = "reconciled"
    SUBMITTED = "submitted"
    ABANDONED = "abandoned"


def make_depot_path(branch: str, *parts: str) -> str:
    """Join a branch root and relative parts into a forward-slash path."""
    segments = [branch.rstrip("/")]
    segments += [part.strip("/").replace("\\", "/") for part in parts if part]
    return "/".join(segments)


class ChangelistManager:
    """
    Owns the pending changelist for a run.

    Every mutation goes through this object, so a run produces one atomic change.
    """

    def __init__(self, source_control: SourceControl, branch: str):
        """
        Initialize the manager.

        Args:
            source_control: Version control backend
            branch: Branch root that depot paths are relative to (e.g. "//depot/Main")
        """
        self.source_control = source_control
        self.branch = branch
        self.changelist: Optional[int] = None
        self.submitted_changelist: Optional[int] = None
        self.state = ChangelistState.PENDING

    def create(self, description: str) -> int:
        """Create the pending changelist."""
        self.changelist = self.source_control.create_change(description)
        self.state = ChangelistState.CREATED
        return self.changelist

    def sync_batch(self, batch: LocalizationBatch) -> None:
        """Sync the localization configs and content of a batch to head."""
        logger.info("Sync necessary content to head revision")
        for sub_directory in ("Config/Localization", "Content/Localization"):
            self.source_control.sync(make_depot_path(self.branch, batch.target_directory, sub_directory, "..."))
        self.state = ChangelistState.SYNCED

    def edit(self, path_pattern: str) -> None:
        """Open files for edit in the pending changelist."""
        self.source_control.edit(self._require_changelist(), path_pattern)
        self.state = ChangelistState.EDITED

    def revert(self, path_pattern: str) -> None:
        """Revert files from the pending changelist."""
        self.source_control.revert(self._require_changelist(), path_pattern)

    def mark_populated(self) -> None:
        """Record that the tool runs have finished writing into the changelist."""
        self.state = ChangelistState.POPULATED

    def reconcile(self, files_to_revert: Sequence[Path]) -> int:
        """
        Remove unchanged files from the pending changelist.

        Files whose content only changed in their header are reverted by
        path, then every other unchanged file is reverted.

        Args:
            files_to_revert: Files known to be unchanged apart from their header

        Returns:
            Number of files reverted by path
        """
        changelist = self._require_changelist()

        if files_to_revert:
            logger.info("Reverting %d portable object file(s) with header-only changes", len(files_to_revert))
            self.source_control.revert_by_file_list([str(path) for path in files_to_revert])

        self.source_control.revert_unchanged(changelist)
        self.state = ChangelistState.RECONCILED
        return len(files_to_revert)

    def submit(self, allow_submit: bool = True) -> Optional[int]:
        """
        Submit the pending changelist.

        An empty changelist is deleted by the backend and is not an error.

        Returns:
            Submitted changelist number, or None if nothing was submitted
        """
        changelist = self._require_changelist()
        if not allow_submit:
            logger.info("Submitting is disabled, leaving changelist %d pending", changelist)
            self.state = ChangelistState.ABANDONED
            return None

        self.submitted_changelist = self.source_control.submit(changelist)
        if self.submitted_changelist is None:
            logger.info("Changelist %d had no changes left to submit", changelist)
        self.state = ChangelistState.SUBMITTED
        return self.submitted_changelist

    def abandon(self) -> None:
        """Record that the run stopped before submitting."""
        if self.state != ChangelistState.SUBMITTED:
            self.state = ChangelistState.ABANDONED

    def _require_changelist(self) -> int:
        if self.changelist is None:
            raise RuntimeError("No pending changelist has been created")
        return self.changelist
