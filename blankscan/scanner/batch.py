"""Batch orchestration: many URLs, bounded fan-out, input-ordered output.

``scan_urls`` validates the batch, drops unusable entries, then runs
:func:`~blankscan.scanner.analyzer.analyze_url` for the survivors in a
``ThreadPoolExecutor`` of width ``settings.concurrency``.  Each result is
written into a pre-sized slot by its position, so completion order never
affects output order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from blankscan.config import Settings, settings as default_settings
from blankscan.scanner.analyzer import analyze_url
from blankscan.scanner.fetcher import normalize_url
from blankscan.scanner.models import ScanResult

logger = logging.getLogger(__name__)


class BatchValidationError(ValueError):
    """The batch request itself is malformed; no URL has been analysed."""


def clean_urls(urls: list[Any]) -> list[str]:
    """Return the trimmed, non-empty string entries of *urls* in order."""
    return [u.strip() for u in urls if isinstance(u, str) and u.strip()]


def _failed_result(url: str, exc: Exception) -> ScanResult:
    message = str(exc) or type(exc).__name__
    return ScanResult(
        original_url=url,
        final_url=normalize_url(url),
        blank_reason=f"Request Failed: {message}",
        is_blank_page=True,
        error=message,
    )


def scan_urls(urls: Any, settings: Settings | None = None) -> list[ScanResult]:
    """Analyse every usable entry of *urls* and return results in input order.

    Args:
        urls: A list of raw URL strings.  Non-string and blank entries are
            dropped silently and produce no result.
        settings: Concurrency, batch-size and per-request overrides.

    Returns:
        One :class:`ScanResult` per surviving entry, in input order.

    Raises:
        BatchValidationError: If *urls* is not a list or holds more than
            ``settings.max_batch_size`` entries.  Raised before any request
            is made.
    """
    cfg = settings or default_settings

    if not isinstance(urls, list):
        raise BatchValidationError('Invalid input. "urls" must be an array of strings.')
    if len(urls) > cfg.max_batch_size:
        raise BatchValidationError(
            f"Batch size limit exceeded. Max {cfg.max_batch_size} URLs per request."
        )

    targets = clean_urls(urls)
    if not targets:
        return []

    logger.info("Scanning %d URL(s) with concurrency %d", len(targets), cfg.concurrency)
    results: list[ScanResult | None] = [None] * len(targets)

    with ThreadPoolExecutor(max_workers=max(1, cfg.concurrency)) as pool:
        future_to_index = {
            pool.submit(analyze_url, url, settings=cfg): index
            for index, url in enumerate(targets)
        }
        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                results[index] = future.result()
            except Exception as exc:
                logger.exception("Unexpected failure analysing %s", targets[index])
                results[index] = _failed_result(targets[index], exc)

    blank = sum(1 for r in results if r is not None and r.is_blank_page)
    logger.info("Scan finished: %d result(s), %d blank", len(results), blank)
    return [r for r in results if r is not None]
