"""
Error taxonomy for mxm-rfr.

Every failure raised by the retrieval pipeline derives from `RfrError`, so a
caller processing several selections can isolate failures per selection with a
single ``except RfrError``. Errors are never retried or recovered internally;
they are raised to the immediate caller, chained to the underlying exception
where there is one.
"""

from __future__ import annotations


class RfrError(RuntimeError):
    """Base class for all pipeline errors."""


class ScrapeError(RfrError):
    """A listing page could not be fetched (non-200 status or transport failure)."""


class DirectoryError(RfrError):
    """A target directory does not exist and could not be created."""


class DownloadError(RfrError):
    """Network or filesystem failure while fetching an archive."""


class ExtractionError(RfrError):
    """The archive is unreadable or holds no entry matching the target pattern."""


class ReleaseNotFoundError(RfrError):
    """The selected release date is not present in the link index."""


class WorksheetError(RfrError):
    """The workbook cannot be opened or read."""


class SheetNotFoundError(WorksheetError):
    """The workbook has no sheet with the requested name."""


class CellRangeError(WorksheetError):
    """The cell range holds missing or non-numeric data."""


__all__ = [
    "RfrError",
    "ScrapeError",
    "DirectoryError",
    "DownloadError",
    "ExtractionError",
    "ReleaseNotFoundError",
    "WorksheetError",
    "SheetNotFoundError",
    "CellRangeError",
]
