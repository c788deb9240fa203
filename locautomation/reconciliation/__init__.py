"""Change detection and changelist reconciliation."""

from .changelist import ChangelistManager, ChangelistState, make_depot_path
from .po_hashes import (
    FileHashes,
    find_unchanged_files,
    get_po_file_hashes,
    hash_portable_object,
    hash_portable_object_file,
)

__all__ = [
    "ChangelistManager",
    "ChangelistState",
    "make_depot_path",
    "FileHashes",
    "find_unchanged_files",
    "get_po_file_hashes",
    "hash_portable_object",
    "hash_portable_object_file",
]
