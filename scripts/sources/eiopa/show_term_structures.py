"""
show_term_structures.py

Compare up to four RFR term structures side by side.

Usage:
    python scripts/sources/eiopa/show_term_structures.py 31-03-2023 31-12-2022 \
        --upper-limit 60 [--every 5] [--overwrite]

With no dates, the newest release is shown.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mxm_rfr.bootstrap import http_adapter_from_config
from mxm_rfr.common.dates import display_labels
from mxm_rfr.common.errors import RfrError
from mxm_rfr.config.config import (
    eiopa_paths,
    eiopa_view,
    ensure_eiopa_config,
    load_config,
    selection_upper_limit,
)
from mxm_rfr.sources.eiopa.api import get_release_index, load_selections
from mxm_rfr.sources.eiopa.models import SelectionRecord

console = Console()

MAX_SELECTIONS = 4


def render(records: list[SelectionRecord], every: int) -> Table:
    """Rates per projection year, formatted as percentages."""
    table = Table(title="RFR term structures (spot, no VA)")
    table.add_column("Year", style="cyan", justify="right")
    for rec in records:
        table.add_column(rec.label, justify="right")
    n = min(len(rec) for rec in records)
    for i in range(n):
        year = i + 1
        if year != 1 and year % every != 0 and year != n:
            continue
        table.add_row(str(year), *(f"{100 * rec.series[i]:.3f}%" for rec in records))
    return table


def main() -> int:
    ap = argparse.ArgumentParser(description="Show EIOPA RFR term structures.")
    ap.add_argument("dates", nargs="*", help="Release dates as dd-mm-yyyy.")
    ap.add_argument("--config", type=Path, default=None, help="User config YAML.")
    ap.add_argument("--upper-limit", type=int, default=None, help="Years to show (30-150).")
    ap.add_argument("--every", type=int, default=5, help="Show every N-th year.")
    ap.add_argument("--overwrite", action="store_true", help="Re-download archives.")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, handlers=[RichHandler(console=console)])

    cfg = load_config(args.config)
    ensure_eiopa_config(cfg)
    view = eiopa_view(cfg)
    paths = eiopa_paths(cfg)
    upper_limit = selection_upper_limit(cfg, args.upper_limit)

    with http_adapter_from_config(cfg) as adapter:
        try:
            index = get_release_index(list(view.pages), adapter=adapter)
        except RfrError as exc:
            console.print(f"[bold red]Scrape failed:[/bold red] {exc}")
            return 1
        labels = args.dates[:MAX_SELECTIONS] or display_labels(index)[:1]
        result = load_selections(
            labels,
            index,
            download_dir=paths.download_dir,
            excel_dir=paths.excel_dir,
            upper_limit=upper_limit,
            overwrite=args.overwrite,
            adapter=adapter,
            member_pattern=str(view.archive.member_pattern),
            sheet_name=str(view.worksheet.sheet_name),
            cell_range=str(view.worksheet.cell_range),
        )

    for label, exc in result.errors.items():
        console.print(f"- [red]{label}[/red]: {exc}")
    if not result.records:
        console.print("[bold red]Nothing to show.[/bold red]")
        return 1
    console.print(render(list(result.records), max(1, args.every)))
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
