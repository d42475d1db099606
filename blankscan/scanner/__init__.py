"""Scanner package — redirect-aware fetch, blank-page classification, batching."""

from blankscan.scanner.analyzer import analyze_url
from blankscan.scanner.batch import BatchValidationError, scan_urls
from blankscan.scanner.classifier import classify_page
from blankscan.scanner.fetcher import fetch_with_redirects, normalize_url
from blankscan.scanner.models import RedirectStep, ScanResult

__all__ = [
    "analyze_url",
    "scan_urls",
    "BatchValidationError",
    "classify_page",
    "fetch_with_redirects",
    "normalize_url",
    "RedirectStep",
    "ScanResult",
]
