"""
list_releases.py

Scrape the EIOPA listing pages and print the published RFR releases.

Usage:
    python scripts/sources/eiopa/list_releases.py [--config user.yaml] [--limit 24]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mxm_rfr.bootstrap import http_adapter_from_config
from mxm_rfr.common.dates import convert_date_to_ddmmyyyy, sort_date_keys
from mxm_rfr.common.errors import RfrError
from mxm_rfr.config.config import eiopa_paths, eiopa_view, ensure_eiopa_config, load_config
from mxm_rfr.sources.eiopa.api import get_release_index
from mxm_rfr.sources.eiopa.download import cache_path

console = Console()


def main() -> int:
    ap = argparse.ArgumentParser(description="List published EIOPA RFR releases.")
    ap.add_argument("--config", type=Path, default=None, help="User config YAML.")
    ap.add_argument("--limit", type=int, default=0, help="Show only the newest N.")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, handlers=[RichHandler(console=console)])

    cfg = load_config(args.config)
    ensure_eiopa_config(cfg)
    pages = list(eiopa_view(cfg).pages)
    paths = eiopa_paths(cfg)

    try:
        with http_adapter_from_config(cfg) as adapter:
            index = get_release_index(pages, adapter=adapter)
    except RfrError as exc:
        console.print(f"[bold red]Scrape failed:[/bold red] {exc}")
        return 1

    keys = sort_date_keys(index)
    if args.limit > 0:
        keys = keys[: args.limit]

    table = Table(title=f"EIOPA RFR releases ({len(index)} found)")
    table.add_column("Date", style="cyan")
    table.add_column("Cached", justify="center")
    table.add_column("Archive URL", style="white", overflow="fold")
    for key in keys:
        url = index[key]
        cached = cache_path(url, paths.download_dir).is_file()
        table.add_row(
            convert_date_to_ddmmyyyy(key), "[green]yes[/green]" if cached else "-", url
        )
    console.print(table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
