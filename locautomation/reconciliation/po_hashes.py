"""Hashing of portable object files, ignoring their volatile header."""

import hashlib
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..models.batch import LocalizationBatch

logger = logging.getLogger(__name__)

PORTABLE_OBJECT_PATTERN = "*.po"

# Absolute path -> digest of the file body
FileHashes = Dict[Path, bytes]


def hash_portable_object(lines: Iterable[str]) -> bytes:
    """
    Hash the body of a portable object file.

    The header (everything up to the first empty line) is skipped as it holds
    transient information such as timestamps.

    Args:
        lines: Lines of the file, with or without line endings

    Returns:
        MD5 digest of the body lines
    """
    digest = hashlib.md5()
    has_parsed_header = False

    for line in lines:
        line = line.rstrip("\r\n")
        if not has_parsed_header:
            has_parsed_header = len(line) == 0
            continue
        digest.update(line.encode("utf-8"))

    return digest.digest()


def hash_portable_object_file(path: Path) -> bytes:
    """Hash the body of a portable object file on disk."""
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return hash_portable_object(f)


def get_localization_content_directory(project_root: Path, batch: LocalizationBatch) -> Path:
    """Get the directory holding the translated content of a batch."""
    return Path(project_root) / batch.target_directory / "Content" / "Localization"


def get_po_file_hashes(batches: Iterable[LocalizationBatch], project_root: Path) -> FileHashes:
    """
    Hash every portable object file of every batch.

    Files that cannot be read are left out of the result, so they are never reverted.

    Args:
        batches: Batches whose content to hash
        project_root: Root the batch directories are relative to

    Returns:
        Mapping of absolute file path to body digest
    """
    hashes: FileHashes = {}

    for batch in batches:
        localization_directory = get_localization_content_directory(project_root, batch)
        if not localization_directory.is_dir():
            continue

        for po_file in sorted(localization_directory.rglob(PORTABLE_OBJECT_PATTERN)):
            if not po_file.is_file():
                continue
            try:
                hashes[po_file.resolve()] = hash_portable_object_file(po_file)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Failed to hash '%s', it will not be reverted: %s", po_file, e)

    return hashes


def find_unchanged_files(initial: Optional[FileHashes], current: FileHashes) -> List[Path]:
    """
    Get the files whose body is identical before and after a run.

    Files with no initial hash are new and are never considered unchanged.

    Args:
        initial: Hashes taken before the run
        current: Hashes taken after the run

    Returns:
        Paths to revert, in sorted order
    """
    if not initial:
        return []
    return sorted(
        path for path, digest in current.items()
        if initial.get(path) == digest
    )
