# mxm_rfr/sources/eiopa/models.py
from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from mxm_rfr.common.errors import RfrError


@dc.dataclass(frozen=True, slots=True)
class SelectionRecord:
    """One selected RFR term structure, ready for rendering."""

    label: str  # release date, dd-mm-yyyy
    source_path: Path  # extracted workbook
    series: tuple[float, ...]  # spot rates by projection year, as decimals

    def __len__(self) -> int:
        return len(self.series)

    @property
    def years(self) -> range:
        """Projection years 1..N matching `series`."""
        return range(1, len(self.series) + 1)


@dc.dataclass(frozen=True, slots=True)
class SelectionResult:
    """Outcome of loading several selections independently."""

    records: tuple[SelectionRecord, ...] = ()
    errors: dict[str, RfrError] = dc.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors
