"""
Record of one download-all run.

Files under ``<logs_dir>/runs/<run_id>/``:

    progress.jsonl     one line per release: time, date_key, status, url,
                       cache path and byte size (ok/skip) or error (err)
    err/<date_key>.json  error type and message for each failed release
    summary.json       counts and start/finish times, written by `finish()`

The log also keeps the running counts, so the caller gets its `BatchStats`
from `finish()` instead of counting on the side.
"""

from __future__ import annotations

import dataclasses as dc
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal, Optional

from mxm_rfr.common.file_io import validate_dir, write_bytes_atomic
from mxm_rfr.common.types import DateKey

Status = Literal["ok", "skip", "err"]


@dc.dataclass(frozen=True)
class BatchStats:
    ok: int
    skip: int
    err: int
    run_dir: Path

    @property
    def total(self) -> int:
        return self.ok + self.skip + self.err


def _utc_stamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _dump(path: Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    write_bytes_atomic(path, text.encode("utf-8"))


class RunLog:
    """Progress lines, error payloads and counts for one run."""

    def __init__(self, logs_dir: Path, run_id: Optional[str] = None) -> None:
        self.run_id = run_id or datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
        self.run_dir = logs_dir / "runs" / self.run_id
        self.progress_path = self.run_dir / "progress.jsonl"
        self.err_dir = self.run_dir / "err"
        self.summary_path = self.run_dir / "summary.json"

        validate_dir(self.err_dir)
        self.progress_path.touch(exist_ok=True)
        self._started = _utc_stamp()
        self._counts: dict[Status, int] = {"ok": 0, "skip": 0, "err": 0}

    def _append(self, date_key: DateKey, status: Status, url: str, **fields: Any) -> None:
        rec = {"time": _utc_stamp(), "date_key": date_key, "status": status, "url": url}
        rec.update(fields)
        with self.progress_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")
        self._counts[status] += 1

    def record_ok(self, date_key: DateKey, url: str, path: Path) -> None:
        """A release fetched into the cache at `path`."""
        self._append(date_key, "ok", url, path=str(path), size=path.stat().st_size)

    def record_skip(self, date_key: DateKey, url: str, path: Path) -> None:
        """A release already cached at `path`; nothing fetched."""
        self._append(
            date_key, "skip", url, reason="exists", path=str(path), size=path.stat().st_size
        )

    def record_err(self, date_key: DateKey, url: str, exc: BaseException) -> None:
        """A release that failed; also writes ``err/<date_key>.json``."""
        error_type = type(exc).__name__
        self._append(date_key, "err", url, error_type=error_type, error=str(exc))
        _dump(
            self.err_dir / f"{date_key}.json",
            {"date_key": date_key, "url": url, "error_type": error_type, "error": str(exc)},
        )

    @property
    def stats(self) -> BatchStats:
        c = self._counts
        return BatchStats(ok=c["ok"], skip=c["skip"], err=c["err"], run_dir=self.run_dir)

    def finish(self) -> BatchStats:
        """Write summary.json and return the final counts."""
        stats = self.stats
        _dump(
            self.summary_path,
            {
                "run_id": self.run_id,
                "started": self._started,
                "finished": _utc_stamp(),
                "ok": stats.ok,
                "skip": stats.skip,
                "err": stats.err,
                "total": stats.total,
            },
        )
        return stats


__all__ = ["BatchStats", "RunLog", "Status"]
