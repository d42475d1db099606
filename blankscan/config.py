"""Centralised settings for the blank-page scanner.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

Every entry point (``analyze_url``, ``scan_urls``, the API and the CLI) takes
an optional :class:`Settings`; pass a modified copy built with
``dataclasses.replace(settings, ...)`` to override individual values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (compatible; BlankPageDetector/1.0; +https://example.com)"
)


@dataclass(frozen=True)
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "10.0"))
    )
    max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("MAX_REDIRECTS", "10"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SCANNER_USER_AGENT", _DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Batch orchestration
    # ------------------------------------------------------------------
    concurrency: int = field(
        default_factory=lambda: int(os.environ.get("SCAN_CONCURRENCY", "10"))
    )
    max_batch_size: int = field(
        default_factory=lambda: int(os.environ.get("MAX_BATCH_SIZE", "1000"))
    )

    # ------------------------------------------------------------------
    # Classifier thresholds
    # ------------------------------------------------------------------
    min_text_length: int = field(
        default_factory=lambda: int(os.environ.get("MIN_TEXT_LENGTH", "30"))
    )
    min_html_length: int = field(
        default_factory=lambda: int(os.environ.get("MIN_HTML_LENGTH", "100"))
    )
    thin_content_length: int = field(
        default_factory=lambda: int(os.environ.get("THIN_CONTENT_LENGTH", "200"))
    )
    single_image_text_limit: int = 10

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )


# Module-level singleton — import this everywhere:
#   from blankscan.config import settings
settings = Settings()
