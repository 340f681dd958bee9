"""
Flat-directory download cache for release archives.

A cache entry is the file ``<directory>/<basename(url)>``; its existence is
the only state. An existing entry is reused without any network I/O unless
``overwrite=True``, so each distinct URL+directory is fetched at most once.
Archives are written atomically: a file under its final name is complete.

Public API
----------
- cache_path(url, directory) -> Path
- ensure_local(url, directory, overwrite=False, *, adapter=None) -> Path
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests

from mxm_rfr.common.errors import DownloadError
from mxm_rfr.common.file_io import validate_dir, write_bytes_atomic
from mxm_rfr.common.http_adapter import Fetcher, HttpRequestsAdapter
from mxm_rfr.sources.eiopa.links import url_basename

logger = logging.getLogger(__name__)


def cache_path(url: str, directory: Path) -> Path:
    """Local path under which `url` is cached in `directory`."""
    name = url_basename(url)
    if not name:
        raise DownloadError(f"URL has no file name: {url}")
    return directory / name


def _download(url: str, target: Path, adapter: Fetcher) -> Path:
    try:
        result = adapter.fetch(url)
    except requests.RequestException as exc:
        raise DownloadError(f"Download failed for {url}: {exc}") from exc
    if result.status != 200:
        raise DownloadError(f"Download failed for {url} (HTTP {result.status})")
    if not result.data:
        raise DownloadError(f"Empty response when downloading {url}")
    try:
        write_bytes_atomic(target, result.data)
    except OSError as exc:
        raise DownloadError(f"Cannot write {target}: {exc}") from exc
    logger.info("Saved %s (%s bytes) to %s", url, f"{len(result.data):,}", target)
    return target


def ensure_local(
    url: str,
    directory: Path,
    overwrite: bool = False,
    *,
    adapter: Optional[Fetcher] = None,
) -> Path:
    """
    Return the local path of the archive at `url`, downloading it if needed.

    Args:
        url: Absolute URL of the archive.
        directory: Cache directory; created if missing.
        overwrite: Re-download even if a cached copy exists.
        adapter: HTTP fetcher; a default `HttpRequestsAdapter` is created (and
            closed) only when a download actually happens.

    Returns:
        ``directory / basename(url)``.

    Raises:
        DirectoryError: If `directory` cannot be created.
        DownloadError: On a non-200 status, an empty body, or a network or
            filesystem failure.
    """
    validate_dir(directory)
    target = cache_path(url, directory)
    if target.is_file() and not overwrite:
        logger.debug("Cache hit for %s at %s", url, target)
        return target

    if adapter is None:
        with HttpRequestsAdapter() as own:
            return _download(url, target, own)
    return _download(url, target, adapter)


__all__ = ["cache_path", "ensure_local"]
