from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

import pytest
import requests
from openpyxl import Workbook

from mxm_rfr.common.http_adapter import HttpResult

RFR_SHEET = "RFR_spot_no_VA"


def rate_for_year(year: int) -> float:
    """Deterministic fake spot rate for projection year 1..150."""
    return round(0.02 + 0.0001 * year, 6)


class FakeFetcher:
    """In-memory `Fetcher`: serves canned responses and records every call."""

    def __init__(self, responses: Optional[Mapping[str, HttpResult | Exception]] = None) -> None:
        self.responses: dict[str, HttpResult | Exception] = dict(responses or {})
        self.calls: list[str] = []

    def add(self, url: str, data: bytes, status: int = 200, content_type: str = "text/html") -> None:
        self.responses[url] = HttpResult(data=data, status=status, url=url, content_type=content_type)

    def fetch(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResult:
        _ = headers, timeout
        self.calls.append(url)
        resp = self.responses.get(url)
        if resp is None:
            return HttpResult(data=b"not found", status=404, url=url)
        if isinstance(resp, Exception):
            raise resp
        return resp


@pytest.fixture
def fake_fetcher() -> Callable[..., FakeFetcher]:
    """Factory for `FakeFetcher` instances."""

    def _make(responses: Optional[Mapping[str, HttpResult | Exception]] = None) -> FakeFetcher:
        return FakeFetcher(responses)

    return _make


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("simulated connection reset")


def _build_workbook(
    path: Path,
    *,
    sheet: str = RFR_SHEET,
    values: Optional[Sequence[object]] = None,
    first_row: int = 11,
    column: int = 3,
) -> Path:
    wb = Workbook()
    ws = wb.active
    assert ws is not None
    ws.title = sheet
    ws.cell(row=1, column=1, value="EIOPA RFR term structures")
    ws.cell(row=10, column=column, value="Euro")
    rows = values if values is not None else [rate_for_year(y) for y in range(1, 151)]
    for i, v in enumerate(rows):
        ws.cell(row=first_row + i, column=column, value=v)
    wb.create_sheet("RFR_spot_with_VA")
    wb.save(path)
    return path


@pytest.fixture
def make_workbook() -> Callable[..., Path]:
    """Write an RFR-like workbook; 150 rates in C11:C160 by default."""
    return _build_workbook


def _build_zip(path: Path, members: Sequence[tuple[str, bytes]]) -> Path:
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in members:
            zf.writestr(name, data)
    return path


@pytest.fixture
def make_zip() -> Callable[[Path, Sequence[tuple[str, bytes]]], Path]:
    """Write a zip archive with the given (name, bytes) members, in order."""
    return _build_zip


@pytest.fixture
def release_zip_bytes(tmp_path: Path) -> Callable[[str], bytes]:
    """Bytes of a release archive for a DateKey, holding a valid RFR workbook."""

    def _make(date_key: str) -> bytes:
        book = _build_workbook(tmp_path / f"src_{date_key}.xlsx")
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(f"EIOPA_RFR_{date_key}_PD_Cod.xlsx", b"not the target")
            zf.write(book, f"EIOPA_RFR_{date_key}_Term_Structures.xlsx")
            zf.writestr(f"EIOPA_RFR_{date_key}_Qb_SW.xlsx", b"not the target either")
        return buf.getvalue()

    return _make


@pytest.fixture
def listing_html() -> str:
    return (Path(__file__).parent / "sources" / "eiopa" / "data" / "listing_page.html").read_text(
        encoding="utf-8"
    )
