"""
Filesystem helpers for the download and extraction caches.

- `validate_dir` implements check-then-create directory validation.
- `write_bytes_atomic` writes to a temporary sibling and renames it into
  place, so a file under its final name is always complete.
- Underlying OS errors surface as `DirectoryError`; callers translate write
  failures into their own error type.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from mxm_rfr.common.errors import DirectoryError

__all__ = ["validate_dir", "write_bytes_atomic"]


def validate_dir(directory: Path, create: bool = True) -> Path:
    """Ensure `directory` exists, creating it (and parents) if allowed.

    Args:
        directory: Directory that must exist.
        create: Whether a missing directory may be created.

    Returns:
        The directory path.

    Raises:
        DirectoryError: If the path is missing and cannot (or may not) be
            created, or if it exists but is not a directory.
    """
    if directory.is_dir():
        return directory
    if directory.exists():
        raise DirectoryError(f"Not a directory: {directory}")
    if not create:
        raise DirectoryError(f"Directory does not exist: {directory}")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryError(f"Cannot create directory {directory}: {exc}") from exc
    return directory


def write_bytes_atomic(path: Path, data: bytes) -> Path:
    """Write `data` to `path` via a temporary file in the same directory.

    The temporary file is renamed over `path` only after all bytes are
    flushed; on failure it is removed and the exception propagates.
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".part"
    )
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return path
