"""Single-URL analysis: fetch → classify → :class:`ScanResult`."""

from __future__ import annotations

import httpx

from blankscan.config import Settings, settings as default_settings
from blankscan.scanner.classifier import classify_page
from blankscan.scanner.fetcher import fetch_with_redirects
from blankscan.scanner.models import Classification, FetchOutcome, ScanResult


def _verdict(outcome: FetchOutcome, cfg: Settings) -> Classification:
    """Map a fetch outcome onto a classification."""
    if outcome.state == "failed":
        return Classification.blank(
            f"Request Failed: {outcome.error}", error=outcome.error
        )
    if outcome.state == "too_many_redirects":
        return Classification.blank(
            "Redirect Loop / Too Many Redirects", error="Too many redirects"
        )
    if outcome.state == "no_content":
        return Classification.blank(f"Status {outcome.status_code} No Content")
    return classify_page(outcome.status_code, outcome.content_length, outcome.body, cfg)


def analyze_url(
    url: str,
    *,
    transport: httpx.BaseTransport | None = None,
    settings: Settings | None = None,
) -> ScanResult:
    """Analyse one URL and return its terminal :class:`ScanResult`.

    Per-URL problems (transport errors, redirect loops, unparsable HTML) are
    folded into the result; this function does not raise for them.

    Args:
        url: The address exactly as submitted; it is normalised for fetching
            but reported unchanged as ``original_url``.
        transport: Optional ``httpx`` transport to send requests through.
        settings: Threshold / timeout overrides.
    """
    cfg = settings or default_settings
    outcome = fetch_with_redirects(url, transport=transport, settings=cfg)
    verdict = _verdict(outcome, cfg)

    return ScanResult(
        original_url=url,
        final_url=outcome.final_url,
        status_code=outcome.status_code,
        redirected=outcome.hops > 0,
        redirect_hops=outcome.hops,
        redirect_chain=outcome.chain,
        content_length=outcome.content_length,
        visible_text_length=verdict.visible_text_length,
        has_images_only=verdict.has_images_only,
        blank_reason=verdict.blank_reason,
        is_blank_page=verdict.is_blank_page,
        error=verdict.error,
    )
