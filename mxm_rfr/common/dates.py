"""
Conversions between the two textual date forms used by mxm-rfr.

- ``yyyymmdd``   DateKey form, as embedded in archive file names.
- ``dd-mm-yyyy`` display form, as shown in selection lists and chart legends.

The converters slice structurally and do no calendar validation; inputs are
always derived from DateKeys or from labels produced by `display_labels`.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from mxm_rfr.common.types import DateKey


def convert_date_to_ddmmyyyy(date: str) -> str:
    """``"20230331"`` -> ``"31-03-2023"``."""
    return f"{date[6:8]}-{date[4:6]}-{date[0:4]}"


def convert_date_to_yyyymmdd(date: str) -> str:
    """``"31-03-2023"`` -> ``"20230331"``."""
    return f"{date[6:10]}{date[3:5]}{date[0:2]}"


def sort_date_keys(keys: Iterable[DateKey], newest_first: bool = True) -> list[DateKey]:
    """Sort DateKeys chronologically (lexicographic order on ``yyyymmdd``)."""
    return sorted(keys, reverse=newest_first)


def display_labels(index: Mapping[DateKey, object]) -> list[str]:
    """Return the index's dates as ``dd-mm-yyyy`` labels, newest first."""
    return [convert_date_to_ddmmyyyy(key) for key in sort_date_keys(index)]


__all__ = [
    "convert_date_to_ddmmyyyy",
    "convert_date_to_yyyymmdd",
    "sort_date_keys",
    "display_labels",
]
