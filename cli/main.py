"""Blank Page Scanner CLI — entry-point for scanning and serving.

Usage:
    python cli/main.py --help

Commands:
    scan   → analyse URLs from arguments and/or a file, print or export results
    serve  → run the HTTP API (POST /api/scan) with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from blankscan.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import re
from dataclasses import replace
from typing import List, Optional

import typer

from blankscan.config import settings
from blankscan.logging_config import configure_logging
from blankscan.scanner.batch import BatchValidationError, scan_urls
from cli.rendering import render_csv, render_json, render_table

app = typer.Typer(
    name="blankscan",
    help="Detect blank pages behind a list of URLs.",
    no_args_is_help=True,
)

_RENDERERS = {
    "table": render_table,
    "json": render_json,
    "csv": render_csv,
}
_SEPARATORS = re.compile(r"[\n,]+")


def parse_url_list(text: str) -> List[str]:
    """Split pasted input on newlines and commas, dropping blank entries."""
    return [u.strip() for u in _SEPARATORS.split(text) if u.strip()]


# ---------------------------------------------------------------------------
# scan
# ---------------------------------------------------------------------------
@app.command("scan")
def scan(
    urls: Optional[List[str]] = typer.Argument(None, help="URLs to scan."),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False,
        help="Read URLs from a file (one per line or comma-separated).",
    ),
    fmt: str = typer.Option("table", "--format", help="Output format: table | json | csv."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write output to a file."),
    concurrency: Optional[int] = typer.Option(None, min=1, help="Simultaneous analyses."),
    timeout: Optional[float] = typer.Option(None, help="Per-request timeout in seconds."),
    max_redirects: Optional[int] = typer.Option(None, min=0, help="Redirect hop limit."),
) -> None:
    """Scan URLs and report which ones resolve to a blank page."""
    renderer = _RENDERERS.get(fmt)
    if renderer is None:
        typer.echo(f"[scan] Unknown format {fmt!r}. Use: table | json | csv")
        raise typer.Exit(1)

    targets: List[str] = []
    for arg in urls or []:
        targets.extend(parse_url_list(arg))
    if file is not None:
        targets.extend(parse_url_list(file.read_text(encoding="utf-8")))
    if not targets:
        typer.echo("[scan] No URLs given. Pass them as arguments or with --file.")
        raise typer.Exit(1)

    overrides = {
        "concurrency": concurrency,
        "request_timeout": timeout,
        "max_redirects": max_redirects,
    }
    cfg = replace(settings, **{k: v for k, v in overrides.items() if v is not None})
    configure_logging(cfg.log_level)

    typer.echo(f"[scan] Scanning {len(targets)} URL(s) …", err=True)
    try:
        results = scan_urls(targets, settings=cfg)
    except BatchValidationError as exc:
        typer.echo(f"[scan] {exc}")
        raise typer.Exit(1)

    rendered = renderer(results)
    if output is not None:
        output.write_text(rendered + "\n", encoding="utf-8")
        typer.echo(f"[scan] Wrote {len(results)} result(s) to {output}")
    else:
        typer.echo(rendered)


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
) -> None:
    """Run the scan API (POST /api/scan) with uvicorn."""
    import uvicorn

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("blankscan.api.app:app", host=host, port=port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
