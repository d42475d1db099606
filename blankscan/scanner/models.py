"""Data models for the scan pipeline.

The pipeline is a chain of pure stages, each returning an immutable value:

    fetch_with_redirects → FetchOutcome
    classify_page        → Classification
    analyze_url          → ScanResult  (the only type that leaves the package)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

FetchState = Literal["response", "no_content", "too_many_redirects", "failed"]


@dataclass(frozen=True)
class RedirectStep:
    """One HTTP exchange in a redirect chain."""

    url: str
    status: int

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "status": self.status}


@dataclass(frozen=True)
class FetchOutcome:
    """Terminal state of the redirect walk for a single URL.

    ``state`` tags which of the remaining fields are meaningful:

    * ``response`` — a non-redirect response was obtained; ``body`` and
      ``content_length`` hold its payload.
    * ``no_content`` — the final response was 204/205; the body was not read.
    * ``too_many_redirects`` — the hop limit was exceeded; ``status_code`` is 0.
    * ``failed`` — a transport error aborted the walk; see ``error``.
    """

    state: FetchState
    final_url: str
    status_code: int = 0
    hops: int = 0
    chain: tuple[RedirectStep, ...] = ()
    body: str = ""
    content_length: int = 0
    error: str | None = None


@dataclass(frozen=True)
class Classification:
    """Verdict produced by the content classifier."""

    is_blank_page: bool = False
    blank_reason: str | None = None
    visible_text_length: int = 0
    has_images_only: bool = False
    error: str | None = None

    @classmethod
    def blank(cls, reason: str, **kwargs: Any) -> "Classification":
        return cls(is_blank_page=True, blank_reason=reason, **kwargs)


@dataclass(frozen=True)
class ScanResult:
    """The per-URL record returned to callers."""

    original_url: str
    final_url: str
    status_code: int = 0
    redirected: bool = False
    redirect_hops: int = 0
    redirect_chain: tuple[RedirectStep, ...] = field(default_factory=tuple)
    content_length: int = 0
    visible_text_length: int = 0
    has_images_only: bool = False
    blank_reason: str | None = None
    is_blank_page: bool = False
    error: str | None = None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready record; ``error`` is omitted when absent."""
        data: dict[str, Any] = {
            "original_url": self.original_url,
            "final_url": self.final_url,
            "status_code": self.status_code,
            "redirected": self.redirected,
            "redirect_hops": self.redirect_hops,
            "redirect_chain": [step.to_dict() for step in self.redirect_chain],
            "content_length": self.content_length,
            "visible_text_length": self.visible_text_length,
            "has_images_only": self.has_images_only,
            "blank_reason": self.blank_reason,
            "is_blank_page": self.is_blank_page,
        }
        if self.error is not None:
            data["error"] = self.error
        return data
