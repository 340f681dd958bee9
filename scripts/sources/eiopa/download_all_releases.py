"""
download_all_releases.py

Fill the local download cache with every published RFR archive.

Workflow:
1. Load config and build the HTTP adapter (bootstrap).
2. Scrape the listing pages into a release index.
3. Run run_download_all() (cached archives are skipped unless --overwrite).
4. Print a summary; per-release progress is in <logs_dir>/runs/<run_id>/.

Usage:
    python scripts/sources/eiopa/download_all_releases.py [--overwrite]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mxm_rfr.bootstrap import http_adapter_from_config
from mxm_rfr.common.errors import RfrError
from mxm_rfr.config.config import eiopa_paths, eiopa_view, ensure_eiopa_config, load_config
from mxm_rfr.sources.eiopa.api import get_release_index
from mxm_rfr.sources.eiopa.batch.run import run_download_all

console = Console()


def main() -> int:
    ap = argparse.ArgumentParser(description="Download all EIOPA RFR archives.")
    ap.add_argument("--config", type=Path, default=None, help="User config YAML.")
    ap.add_argument("--overwrite", action="store_true", help="Re-download cached files.")
    ap.add_argument("--run-id", default=None, help="Run identifier for the log dir.")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, handlers=[RichHandler(console=console)])

    cfg = load_config(args.config)
    ensure_eiopa_config(cfg)
    paths = eiopa_paths(cfg)

    with http_adapter_from_config(cfg) as adapter:
        try:
            index = get_release_index(list(eiopa_view(cfg).pages), adapter=adapter)
        except RfrError as exc:
            console.print(f"[bold red]Scrape failed:[/bold red] {exc}")
            return 1
        stats = run_download_all(
            index,
            paths.download_dir,
            logs_dir=paths.logs_dir,
            overwrite=args.overwrite,
            adapter=adapter,
            run_id=args.run_id,
        )

    console.rule(f"[bold cyan]EIOPA download run ({stats.run_dir.name})")
    table = Table(title="Run Summary")
    table.add_column("Status", style="cyan", justify="right")
    table.add_column("Count", style="white", justify="right")
    table.add_row("OK", str(stats.ok))
    table.add_row("SKIP", str(stats.skip))
    table.add_row("ERR", str(stats.err))
    table.add_row("TOTAL", str(stats.total))
    console.print(table)
    console.print(f"Archives in {paths.download_dir}")
    return 1 if stats.err else 0


if __name__ == "__main__":
    raise SystemExit(main())
