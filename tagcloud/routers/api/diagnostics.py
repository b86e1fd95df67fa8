# ruff: noqa: B008
"""Database diagnostics route."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from tagcloud.database import Store, get_store
from tagcloud.schemas import DatabaseStatus
from tagcloud.utils.store_errors import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["diagnostics"])


@router.get("/test-db", response_model=DatabaseStatus)
def test_db(store: Store = Depends(get_store)):
    """Check that the database answers a trivial query."""
    try:
        now = store.now()
    except StoreError as e:
        logger.error(f"Database check failed: {e!r}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Database connection failed"},
        )
    return DatabaseStatus(success=True, time=now)
