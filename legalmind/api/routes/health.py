"""Health check endpoints."""

import json
import os
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Response
from sqlalchemy import text

from legalmind.config import Settings, get_settings
from legalmind.db.engine import get_async_engine

router = APIRouter()


async def check_db() -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


async def check_collections(settings: Settings) -> tuple[bool, str]:
    """Check that the collections directory exists and is writable.

    Returns:
        (is_ok, status_message)
    """
    collections_dir = Path(settings.collections_dir)
    if not collections_dir.is_dir():
        return (False, "error: missing")
    if not os.access(collections_dir, os.R_OK | os.W_OK):
        return (False, "error: not_writable")
    return (True, "ok")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple liveness check.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Readiness check.

    Returns:
        200 with component status if storage is reachable, 503 otherwise
    """
    db_ok, db_status = await check_db()
    collections_ok, collections_status = await check_collections(get_settings())

    response_body = {
        "status": "ok" if db_ok and collections_ok else "degraded",
        "components": {
            "db": db_status,
            "collections": collections_status,
        },
    }

    if not (db_ok and collections_ok):
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
