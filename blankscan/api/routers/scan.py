"""Scan endpoint — batch blank-page analysis.

Routes
------
POST /api/scan    Body: {"urls": ["example.com", ...]}    → scan_urls
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from blankscan.scanner.batch import BatchValidationError, scan_urls

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScanRequest(BaseModel):
    # Entries are not typed as str: non-string items are dropped, not rejected.
    urls: list[Any]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/scan", response_model=None)
def scan_endpoint(body: ScanRequest, request: Request) -> Any:
    """Analyse every URL in the batch and return one record per usable entry.

    Results keep the order of the submitted list.  Per-URL failures are
    reported inside the records; only a malformed batch (HTTP 400) or an
    unexpected fault (HTTP 500) fails the whole request.
    """
    cfg = request.app.state.settings
    try:
        results = scan_urls(body.urls, settings=cfg)
    except BatchValidationError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    except Exception as exc:
        logger.exception("Scan error")
        return JSONResponse(
            {"error": "Internal Server Error", "details": str(exc)},
            status_code=500,
        )
    return [r.to_dict() for r in results]
