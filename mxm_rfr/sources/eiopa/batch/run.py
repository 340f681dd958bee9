from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from mxm_rfr.common.dates import sort_date_keys
from mxm_rfr.common.errors import RfrError
from mxm_rfr.common.http_adapter import Fetcher, HttpRequestsAdapter
from mxm_rfr.common.types import DateKey
from mxm_rfr.sources.eiopa.batch.runlog import BatchStats, RunLog
from mxm_rfr.sources.eiopa.download import cache_path, ensure_local

logger = logging.getLogger(__name__)


def run_download_all(
    index: Mapping[DateKey, str],
    download_dir: Path,
    *,
    logs_dir: Path,
    overwrite: bool = False,
    adapter: Optional[Fetcher] = None,
    run_id: Optional[str] = None,
) -> BatchStats:
    """
    Fill the download cache with every release in `index`, newest first.

      1) init run log
      2) per release: skip if cached (unless overwrite) -> ensure_local -> log
      3) write summary.json, return counts

    A failing release is logged as "err" and the batch moves on.
    """
    if adapter is None:
        with HttpRequestsAdapter() as own:
            return run_download_all(
                index,
                download_dir,
                logs_dir=logs_dir,
                overwrite=overwrite,
                adapter=own,
                run_id=run_id,
            )

    log = RunLog(logs_dir, run_id=run_id)

    for key in sort_date_keys(index):
        url = index[key]
        try:
            cached = cache_path(url, download_dir)
            if not overwrite and cached.is_file():
                log.record_skip(key, url, cached)
                continue
            path = ensure_local(url, download_dir, overwrite, adapter=adapter)
        except RfrError as exc:
            logger.warning("Download of %s failed: %s", key, exc)
            log.record_err(key, url, exc)
            continue
        log.record_ok(key, url, path)

    stats = log.finish()
    logger.info(
        "Download run %s: ok=%d skip=%d err=%d", log.run_id, stats.ok, stats.skip, stats.err
    )
    return stats
