"""
Read a term structure from the RFR workbook.

The spot rates without volatility adjustment live on sheet ``RFR_spot_no_VA``
in column C, rows 11-160: one rate per projection year, 150 years in total.
Rates are decimals (0.0325 for 3.25%); formatting as percentages is left to
the presentation layer.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import zipfile
from numbers import Real
from pathlib import Path
from typing import Optional

from openpyxl import load_workbook
from openpyxl.utils.cell import get_column_letter, range_boundaries
from openpyxl.utils.exceptions import InvalidFileException

from mxm_rfr.common.errors import CellRangeError, SheetNotFoundError, WorksheetError

logger = logging.getLogger(__name__)

RFR_SHEET_NAME: str = "RFR_spot_no_VA"
RFR_CELL_RANGE: str = "C11:C160"
MIN_UPPER_LIMIT: int = 30


@dc.dataclass(frozen=True, slots=True)
class CellRange:
    """A single-column block of cells, e.g. ``C11:C160``."""

    column: int  # 1-based column index
    first_row: int
    last_row: int

    @classmethod
    def parse(cls, ref: str) -> CellRange:
        """Parse A1 notation; the range must span exactly one column."""
        min_col, min_row, max_col, max_row = range_boundaries(ref)
        if None in (min_col, min_row, max_col, max_row):
            raise ValueError(f"Cell range must be bounded: {ref!r}")
        if min_col != max_col:
            raise ValueError(f"Cell range must be a single column: {ref!r}")
        return cls(column=int(min_col), first_row=int(min_row), last_row=int(max_row))  # type: ignore[arg-type]

    @property
    def size(self) -> int:
        return self.last_row - self.first_row + 1

    def coordinate(self, offset: int) -> str:
        """A1 coordinate of the `offset`-th cell (0-based) in the range."""
        return f"{get_column_letter(self.column)}{self.first_row + offset}"

    def __str__(self) -> str:
        return f"{self.coordinate(0)}:{self.coordinate(self.size - 1)}"


def _as_rate(value: object, cell_range: CellRange, offset: int, sheet_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise CellRangeError(
            f"Non-numeric value {value!r} in {sheet_name}!{cell_range.coordinate(offset)}"
        )
    return float(value)


def read_range(
    file_path: Path,
    sheet_name: str = RFR_SHEET_NAME,
    cell_range: CellRange | str = RFR_CELL_RANGE,
    upper_limit: Optional[int] = None,
) -> list[float]:
    """
    Read a single-column cell range as floats, in row order.

    Args:
        file_path: Workbook to read.
        sheet_name: Exact name of the sheet.
        cell_range: Range in A1 notation or as a `CellRange`.
        upper_limit: Number of leading values to return
            (``MIN_UPPER_LIMIT <= upper_limit <= size``); all if None.

    Returns:
        The first `upper_limit` rates.

    Raises:
        ValueError: If `upper_limit` is out of bounds or the range is not a
            single column.
        WorksheetError: If the workbook cannot be opened.
        SheetNotFoundError: If the sheet does not exist.
        CellRangeError: If any cell in the range is empty or non-numeric, or
            the sheet has fewer rows than the range requires.
    """
    rng = CellRange.parse(cell_range) if isinstance(cell_range, str) else cell_range
    limit = rng.size if upper_limit is None else upper_limit
    if not MIN_UPPER_LIMIT <= limit <= rng.size:
        raise ValueError(
            f"upper_limit must be between {MIN_UPPER_LIMIT} and {rng.size}, got {limit}"
        )

    try:
        wb = load_workbook(file_path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise WorksheetError(f"Cannot open workbook {file_path}: {exc}") from exc

    try:
        if sheet_name not in wb.sheetnames:
            raise SheetNotFoundError(f"Sheet {sheet_name!r} not found in {file_path}")
        ws = wb[sheet_name]
        raw = [
            row[0]
            for row in ws.iter_rows(
                min_row=rng.first_row,
                max_row=rng.last_row,
                min_col=rng.column,
                max_col=rng.column,
                values_only=True,
            )
        ]
    finally:
        wb.close()

    if len(raw) < rng.size:
        raise CellRangeError(
            f"Sheet {sheet_name!r} has {len(raw)} of {rng.size} rows required by {rng}"
        )
    rates = [_as_rate(v, rng, i, sheet_name) for i, v in enumerate(raw)]
    logger.debug("Read %d rates from %s!%s", len(rates), sheet_name, rng)
    return rates[:limit]


__all__ = [
    "RFR_SHEET_NAME",
    "RFR_CELL_RANGE",
    "MIN_UPPER_LIMIT",
    "CellRange",
    "read_range",
]
