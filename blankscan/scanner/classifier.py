"""Blank-page heuristics: turns a terminal response into a :class:`Classification`.

The decision procedure is ordered; the first matching rule wins:

1. HTTP error status with a thin body.
2. Raw HTML shorter than ``min_html_length``.
3. Enough visible body text (``min_text_length``) → not blank.
4. Otherwise one of: single image without text, empty body, low visible text.

``img`` / ``iframe`` elements are counted on the parsed document *before*
non-visible markup is removed, so the counts reflect the source markup.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from blankscan.config import Settings, settings as default_settings
from blankscan.scanner.models import Classification

logger = logging.getLogger(__name__)

_NON_VISIBLE_TAGS = ["script", "style", "iframe", "svg", "meta", "link", "noscript"]
_WHITESPACE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _visible_text(soup: BeautifulSoup) -> str:
    """Strip non-visible elements from *soup* in place and return its text.

    Everything outside ``<head>`` counts, including text the parser leaves
    after ``</body>`` or documents with no ``<body>`` element at all.
    """
    for tag in soup(_NON_VISIBLE_TAGS + ["head", "title"]):
        # Nested matches (a <style> inside <svg>) go with their ancestor.
        if not tag.decomposed:
            tag.decompose()

    return _WHITESPACE.sub(" ", soup.get_text()).strip()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_page(
    status_code: int,
    content_length: int,
    html: str,
    settings: Settings | None = None,
) -> Classification:
    """Decide whether a fetched page is effectively blank.

    Pure function: the same inputs always give the same verdict.  A parser
    failure does not raise; it is reported as ``error="Parsing error"`` on a
    not-blank classification.
    """
    cfg = settings or default_settings

    if status_code >= 400 and content_length < cfg.thin_content_length:
        return Classification.blank(f"HTTP Error {status_code} with thin content")

    if len(html) < cfg.min_html_length:
        return Classification.blank(f"HTML too short (<{cfg.min_html_length} chars)")

    try:
        soup = BeautifulSoup(html, "html.parser")
        image_count = len(soup.find_all("img"))
        iframe_count = len(soup.find_all("iframe"))
        text_length = len(_visible_text(soup))
    except Exception as exc:  # noqa: BLE001 - any parser fault is per-page
        logger.warning("Could not parse HTML: %s", exc)
        return Classification(error="Parsing error")

    if text_length >= cfg.min_text_length:
        return Classification(visible_text_length=text_length)

    if image_count == 1 and text_length < cfg.single_image_text_limit:
        return Classification.blank(
            "Single image without text",
            visible_text_length=text_length,
            has_images_only=True,
        )

    if text_length == 0 and image_count == 0 and iframe_count == 0:
        return Classification.blank("Empty Body / No Text", visible_text_length=0)

    return Classification.blank(
        f"Low visible text (<{cfg.min_text_length} chars)",
        visible_text_length=text_length,
    )
