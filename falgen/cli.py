# falgen/cli.py
from __future__ import annotations
import argparse
import sys
from pathlib import Path

from rich.console import Console

from .core import (
    setup_logging, load_cfg, load_catalog, rank, to_options,
    build_request, RequestError, SearchConfig,
)
from .tui import results_table, status_line

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="fal.ai media generator (terminal browser)")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    ap.add_argument("--offline", action="store_true", help="Skip the catalog API, use built-in models")
    ap.add_argument("--log-dir", default="logs", help="Directory for per-run log files")
    ap.add_argument("--search", metavar="QUERY", help="Print ranked models for QUERY and exit")
    ap.add_argument("--limit", type=int, default=20, help="Rows to print with --search")
    ap.add_argument("--model", help="Model id for a one-shot request (bypass menu)")
    ap.add_argument("--prompt", help="Prompt for a one-shot request")
    ap.add_argument("--ratio", default="1:1", help="Aspect ratio (1:1, 16:9, 9:16, 21:9, 4:3)")
    ap.add_argument("--json", action="store_true", help="Machine-readable output")
    return ap.parse_args(argv)

def run_search(query: str, offline: bool, limit: int, console: Console) -> int:
    cfg = load_cfg()
    catalog, _ = load_catalog(offline=offline)
    matches = rank(catalog, query, SearchConfig.from_cfg(cfg))
    options = to_options(matches)
    console.print(results_table(options, limit=max(limit, 1), title=f"Models for '{query}'"))
    console.print(f"[dim]{status_line(options, len(catalog))}[/]")
    return 0 if matches else 1

def run_request(model: str, prompt: str, ratio: str, as_json: bool, console: Console) -> int:
    try:
        req = build_request(model, prompt, ratio)
    except RequestError as e:
        console.print(f"[red]Error:[/] {e}")
        return 2
    if as_json:
        print(req.to_json())
    else:
        console.print(f"[bold]Model:[/] {req.model_id}")
        for k, v in req.arguments.items():
            console.print(f"[bold]{k}:[/] {v}")
    return 0

def main(argv=None) -> int:
    args = parse_args(argv)
    verbose = args.verbose or bool(load_cfg().get("verbose", False))
    setup_logging(verbose=verbose, log_dir=Path(args.log_dir) if args.log_dir else None)
    console = Console()

    # CLI mode
    if args.search is not None:
        return run_search(args.search, args.offline, args.limit, console)

    if args.model or args.prompt:
        return run_request(args.model or "", args.prompt or "", args.ratio, args.json, console)

    from .ui import main_menu
    main_menu(offline=args.offline)
    return 0

if __name__ == "__main__":
    sys.exit(main())
