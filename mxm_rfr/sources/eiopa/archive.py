"""
Extract the term-structure workbook from a release archive.

Each EIOPA release zip holds several workbooks; the one carrying the RFR term
structures is identified by the ``_Term_Structures.xlsx`` marker in its name.
The first entry matching the marker, in archive order, wins.
"""

from __future__ import annotations

import logging
import posixpath
import zipfile
import zlib
from pathlib import Path
from typing import Optional

from mxm_rfr.common.errors import ExtractionError
from mxm_rfr.common.file_io import validate_dir, write_bytes_atomic

logger = logging.getLogger(__name__)

TERM_STRUCTURES_MARKER: str = "_Term_Structures.xlsx"

# Corrupt or unsupported members surface as zlib errors, NotImplementedError
# (compression method), or RuntimeError (encrypted entry).
_UNREADABLE = (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, OSError)


def find_member(archive: zipfile.ZipFile, name_pattern: str) -> Optional[zipfile.ZipInfo]:
    """Return the first file entry whose name contains `name_pattern`."""
    for info in archive.infolist():
        if info.is_dir():
            continue
        if name_pattern in info.filename:
            return info
    return None


def list_members(archive_path: Path) -> list[str]:
    """Names of all entries in the archive, in archive order."""
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            return zf.namelist()
    except _UNREADABLE as exc:
        raise ExtractionError(f"Cannot read archive {archive_path}: {exc}") from exc


def extract_target(
    archive_path: Path,
    out_dir: Path,
    name_pattern: str = TERM_STRUCTURES_MARKER,
) -> Path:
    """
    Write the first entry matching `name_pattern` to `out_dir`.

    The entry is written under its base name; directories inside the archive
    are not recreated. An earlier extraction of the same entry is overwritten.

    Args:
        archive_path: Zip archive to read.
        out_dir: Destination directory; created if missing.
        name_pattern: Substring identifying the target entry.

    Returns:
        Path of the extracted file.

    Raises:
        DirectoryError: If `out_dir` cannot be created.
        ExtractionError: If no entry matches, or the archive is unreadable.
    """
    validate_dir(out_dir)
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            info = find_member(zf, name_pattern)
            data = zf.read(info) if info is not None else None
    except _UNREADABLE as exc:
        raise ExtractionError(f"Cannot read archive {archive_path}: {exc}") from exc
    if info is None or data is None:
        raise ExtractionError(
            f"Target not found: no entry containing {name_pattern!r} in {archive_path}"
        )

    target = out_dir / posixpath.basename(info.filename)
    try:
        write_bytes_atomic(target, data)
    except OSError as exc:
        raise ExtractionError(f"Cannot write {target}: {exc}") from exc
    logger.info("Extracted %s from %s", info.filename, archive_path.name)
    return target


__all__ = ["TERM_STRUCTURES_MARKER", "find_member", "list_members", "extract_target"]
