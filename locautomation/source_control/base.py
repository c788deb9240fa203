"""Interface to the version control backend."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence


class SourceControl(ABC):
    """
    Operations the automation needs from a version control backend.

    Path patterns use forward slashes and may end in "/..." to match a whole tree.
    """

    @abstractmethod
    def create_change(self, description: str) -> int:
        """Create a pending change and return its number."""

    @abstractmethod
    def sync(self, path_pattern: str) -> None:
        """Sync files to the head revision."""

    @abstractmethod
    def preview_sync(self, path_pattern: str) -> List[str]:
        """Return the files a sync would update, without syncing."""

    @abstractmethod
    def edit(self, change: int, path_pattern: str) -> None:
        """Open files for edit in a pending change."""

    @abstractmethod
    def revert(self, change: int, path_pattern: str) -> None:
        """Revert files opened in a pending change."""

    @abstractmethod
    def revert_by_file_list(self, file_list: Sequence[str]) -> None:
        """Revert every file listed in an arguments file."""

    @abstractmethod
    def revert_unchanged(self, change: int) -> None:
        """Revert every file in a pending change whose content did not change."""

    @abstractmethod
    def submit(self, change: int) -> Optional[int]:
        """
        Submit a pending change.

        Returns:
            The submitted change number, or None when the change was empty and deleted
        """

    def get_authentication_token(self) -> str:
        """Get a credential the editor can use to connect to the backend."""
        return ""
