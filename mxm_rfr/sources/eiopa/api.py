"""
mxm_rfr.sources.eiopa.api

Public entry point for retrieving EIOPA RFR term structures.

Typical flow (what a notebook or dashboard does):

    index = get_release_index()                   # scrape listing pages
    labels = display_labels(index)                # "dd-mm-yyyy", newest first
    result = load_selections(labels[:2], index,
                             download_dir=Path("download"),
                             excel_dir=Path("excel"),
                             upper_limit=60)
    for rec in result.records:
        plot(rec.years, rec.series, label=rec.label)

Directories are always explicit parameters; nothing here reads configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from mxm_rfr.common.dates import convert_date_to_yyyymmdd
from mxm_rfr.common.errors import ReleaseNotFoundError, RfrError
from mxm_rfr.common.http_adapter import Fetcher
from mxm_rfr.common.types import DateKey, LinkIndex
from mxm_rfr.sources.eiopa.archive import TERM_STRUCTURES_MARKER, extract_target
from mxm_rfr.sources.eiopa.download import ensure_local
from mxm_rfr.sources.eiopa.models import SelectionRecord, SelectionResult
from mxm_rfr.sources.eiopa.scrape import RFR_PAGES, scrape_pages
from mxm_rfr.sources.eiopa.worksheet import (
    RFR_CELL_RANGE,
    RFR_SHEET_NAME,
    CellRange,
    read_range,
)

logger = logging.getLogger(__name__)

DEFAULT_UPPER_LIMIT: int = 60


def get_release_index(
    pages: Sequence[str] = RFR_PAGES,
    *,
    adapter: Optional[Fetcher] = None,
) -> LinkIndex:
    """Scrape the listing pages and return DateKey -> archive URL."""
    return scrape_pages(pages, adapter=adapter)


def resolve_release(label: str, index: Mapping[DateKey, str]) -> str:
    """Archive URL for a ``dd-mm-yyyy`` label.

    Raises:
        ReleaseNotFoundError: If the date is not in `index`.
    """
    key = convert_date_to_yyyymmdd(label)
    try:
        return index[key]
    except KeyError:
        raise ReleaseNotFoundError(f"No RFR release published for {label}") from None


def load_selection(
    label: str,
    index: Mapping[DateKey, str],
    *,
    download_dir: Path,
    excel_dir: Path,
    upper_limit: int = DEFAULT_UPPER_LIMIT,
    overwrite: bool = False,
    adapter: Optional[Fetcher] = None,
    member_pattern: str = TERM_STRUCTURES_MARKER,
    sheet_name: str = RFR_SHEET_NAME,
    cell_range: CellRange | str = RFR_CELL_RANGE,
) -> SelectionRecord:
    """
    Download (or reuse), extract and read one release.

    Args:
        label: Release date as ``dd-mm-yyyy``.
        index: Link index from `get_release_index`.
        download_dir: Cache directory for archives.
        excel_dir: Directory for extracted workbooks.
        upper_limit: Number of projection years to keep.
        overwrite: Re-download the archive even if cached.
        adapter: HTTP fetcher used for the download, if one is needed.
        member_pattern: Marker identifying the workbook inside the archive.
        sheet_name: Sheet holding the term structure.
        cell_range: Single-column range holding the rates.

    Raises:
        RfrError: Any pipeline failure (see `mxm_rfr.common.errors`).
        ValueError: If `upper_limit` is out of bounds.
    """
    url = resolve_release(label, index)
    archive = ensure_local(url, download_dir, overwrite, adapter=adapter)
    workbook = extract_target(archive, excel_dir, member_pattern)
    rates = read_range(workbook, sheet_name, cell_range, upper_limit)
    return SelectionRecord(label=label, source_path=workbook, series=tuple(rates))


def load_selections(
    labels: Iterable[str],
    index: Mapping[DateKey, str],
    *,
    download_dir: Path,
    excel_dir: Path,
    upper_limit: int = DEFAULT_UPPER_LIMIT,
    overwrite: bool = False,
    adapter: Optional[Fetcher] = None,
    member_pattern: str = TERM_STRUCTURES_MARKER,
    sheet_name: str = RFR_SHEET_NAME,
    cell_range: CellRange | str = RFR_CELL_RANGE,
) -> SelectionResult:
    """
    Load several releases, each independently of the others.

    Blank labels are skipped and repeated labels are loaded once. A failing
    selection is recorded in ``SelectionResult.errors`` and does not stop the
    remaining ones.
    """
    records: list[SelectionRecord] = []
    errors: dict[str, RfrError] = {}
    seen: set[str] = set()

    for label in labels:
        if not label or label in seen:
            continue
        seen.add(label)
        try:
            rec = load_selection(
                label,
                index,
                download_dir=download_dir,
                excel_dir=excel_dir,
                upper_limit=upper_limit,
                overwrite=overwrite,
                adapter=adapter,
                member_pattern=member_pattern,
                sheet_name=sheet_name,
                cell_range=cell_range,
            )
        except RfrError as exc:
            logger.warning("Selection %s failed: %s", label, exc)
            errors[label] = exc
            continue
        records.append(rec)

    return SelectionResult(records=tuple(records), errors=errors)


__all__ = [
    "DEFAULT_UPPER_LIMIT",
    "get_release_index",
    "resolve_release",
    "load_selection",
    "load_selections",
]
