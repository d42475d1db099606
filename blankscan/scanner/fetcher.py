"""HTTP fetcher that walks redirect chains by hand.

Requests go straight through an ``httpx.HTTPTransport`` rather than a
``Client``: the transport never interprets ``Location``, so every 3xx
response (even one with a malformed target) reaches the walk and is recorded
as a :class:`RedirectStep`.  The walk stops at the first non-redirect
response, when the hop limit is exceeded, or when the transport raises.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import httpx

from blankscan.config import Settings, settings as default_settings
from blankscan.scanner.models import FetchOutcome, RedirectStep

logger = logging.getLogger(__name__)

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
_NO_CONTENT_STATUSES = (204, 205)
_SCHEMES = ("http://", "https://")


def normalize_url(url: str) -> str:
    """Prefix ``https://`` unless *url* already starts with an http(s) scheme."""
    if not url.startswith(_SCHEMES):
        return f"https://{url}"
    return url


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Pending:
    """Carry state between two exchanges of the redirect walk."""

    url: str
    hops: int = 0
    chain: tuple[RedirectStep, ...] = ()

    def record(self, status: int) -> "_Pending":
        return _Pending(self.url, self.hops, self.chain + (RedirectStep(self.url, status),))


def _build_request(url: str, cfg: Settings) -> httpx.Request:
    return httpx.Request(
        "GET",
        url,
        headers={"User-Agent": cfg.user_agent, "Accept": _ACCEPT},
        extensions={"timeout": httpx.Timeout(cfg.request_timeout).as_dict()},
    )


def _resolve_location(current_url: str, location: str) -> str | None:
    """Resolve a ``Location`` header against *current_url*.

    Returns ``None`` when the target cannot be resolved and is not already an
    absolute URL.
    """
    try:
        return str(httpx.URL(current_url).join(location))
    except (httpx.InvalidURL, ValueError):
        if location.startswith(_SCHEMES):
            return location
        return None


def _read_body(response: httpx.Response, deadline: float, limit: float) -> bytes:
    """Read the whole body, failing once the exchange outlives *deadline*."""
    chunks = []
    for chunk in response.iter_bytes():
        chunks.append(chunk)
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout(f"Response body not received within {limit:g}s")
    return b"".join(chunks)


def _decode(raw: bytes, response: httpx.Response) -> str:
    try:
        return raw.decode(response.encoding or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch_with_redirects(
    url: str,
    *,
    transport: httpx.BaseTransport | None = None,
    settings: Settings | None = None,
) -> FetchOutcome:
    """Fetch *url*, following up to ``settings.max_redirects`` redirects by hand.

    Never raises for network problems: transport errors (timeouts, DNS
    failures, resets, unfetchable redirect targets) come back as a
    ``failed`` outcome carrying the error message.

    Args:
        url: Raw user input; normalised with :func:`normalize_url` first.
        transport: Optional transport to send requests through.  When
            omitted a fresh ``httpx.HTTPTransport`` is created and closed for
            this call.
        settings: Overrides for the hop limit, timeout and user agent.
    """
    cfg = settings or default_settings
    if transport is None:
        with httpx.HTTPTransport() as owned:
            return _walk(normalize_url(url), owned, cfg)
    return _walk(normalize_url(url), transport, cfg)


def _walk(start_url: str, transport: httpx.BaseTransport, cfg: Settings) -> FetchOutcome:
    pending = _Pending(start_url)

    try:
        while True:
            request = _build_request(pending.url, cfg)
            deadline = time.monotonic() + cfg.request_timeout
            response = transport.handle_request(request)
            try:
                status = response.status_code
                pending = pending.record(status)
                location = response.headers.get("location")

                if 300 <= status < 400 and location:
                    target = _resolve_location(pending.url, location)
                    if target is not None:
                        hops = pending.hops + 1
                        if hops > cfg.max_redirects:
                            logger.info("Redirect limit exceeded at %s", pending.url)
                            return FetchOutcome(
                                state="too_many_redirects",
                                final_url=pending.url,
                                hops=hops,
                                chain=pending.chain,
                                error="Too many redirects",
                            )
                        logger.debug("Hop %d: %s -> %s (%d)", hops, pending.url, target, status)
                        pending = _Pending(target, hops, pending.chain)
                        continue
                    logger.debug("Unresolvable redirect target %r at %s", location, pending.url)

                if status in _NO_CONTENT_STATUSES:
                    return FetchOutcome(
                        state="no_content",
                        final_url=pending.url,
                        status_code=status,
                        hops=pending.hops,
                        chain=pending.chain,
                    )

                raw = _read_body(response, deadline, cfg.request_timeout)
                return FetchOutcome(
                    state="response",
                    final_url=pending.url,
                    status_code=status,
                    hops=pending.hops,
                    chain=pending.chain,
                    body=_decode(raw, response),
                    content_length=len(raw),
                )
            finally:
                response.close()
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError) as exc:
        message = _describe(exc)
        logger.warning("Request failed for %s: %s", pending.url, message)
        return FetchOutcome(
            state="failed",
            final_url=pending.url,
            hops=pending.hops,
            chain=pending.chain,
            error=message,
        )
