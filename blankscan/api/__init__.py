"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from blankscan.api import app

    uvicorn blankscan.api:app --reload
"""

from blankscan.api.app import app

__all__ = ["app"]
