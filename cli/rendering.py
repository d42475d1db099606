"""Utilities for rendering scan results in the CLI (table, JSON, CSV)."""

from __future__ import annotations

import json
from typing import Any, List

from blankscan.scanner.models import ScanResult

CSV_HEADERS = [
    "URL",
    "Final URL",
    "Status",
    "Redirects",
    "Content Length",
    "Visible Text",
    "Is Blank",
    "Reason",
]


def render_json(results: List[ScanResult]) -> str:
    """Dump the exact result array, as served by ``POST /api/scan``."""
    return json.dumps([r.to_dict() for r in results], indent=2)


def _csv_cell(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return '"' + str(value).replace('"', '""') + '"'


def render_csv(results: List[ScanResult]) -> str:
    """Render *results* as CSV with every cell quoted.

    Embedded double quotes are doubled; a missing reason becomes an empty cell.
    """
    lines = [",".join(CSV_HEADERS)]
    for r in results:
        row = [
            r.original_url,
            r.final_url,
            r.status_code,
            r.redirect_hops,
            r.content_length,
            r.visible_text_length,
            r.is_blank_page,
            r.blank_reason or "",
        ]
        lines.append(",".join(_csv_cell(cell) for cell in row))
    return "\n".join(lines)


def render_table(results: List[ScanResult]) -> str:
    """Render a plain-text report: one line per URL plus its redirect chain.

    Example::

        [200] OK     example.com
        [200] BLANK  old.example.com  — Low visible text (<30 chars)
              ├── 301 https://old.example.com
              └── 200 https://new.example.com/
        [ERR] BLANK  gone.example.com  — Request Failed: timed out
    """
    lines = []
    for r in results:
        status = str(r.status_code) if r.status_code else "ERR"
        verdict = "BLANK" if r.is_blank_page else "OK"
        line = f"[{status:>3}] {verdict:<6} {r.original_url}"
        if r.blank_reason:
            line += f"  — {r.blank_reason}"
        lines.append(line)

        if r.redirected:
            count = len(r.redirect_chain)
            for i, step in enumerate(r.redirect_chain):
                connector = "└── " if i == count - 1 else "├── "
                lines.append(f"      {connector}{step.status} {step.url}")

    blank = sum(1 for r in results if r.is_blank_page)
    lines.append("")
    lines.append(f"{len(results)} scanned, {blank} blank, {len(results) - blank} with content")
    return "\n".join(lines)
