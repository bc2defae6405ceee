"""Settings endpoints - GET /settings, POST /settings."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.engine import get_session
from legalmind.db.settings_store import get_all_settings, upsert_settings

router = APIRouter(prefix="/settings", tags=["settings"])


class SuccessResponse(BaseModel):
    """Generic success flag."""

    success: bool


@router.get("", response_model=dict[str, str])
async def get_settings_map(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict[str, str]:
    """Return all settings as a flat key/value object."""
    return await get_all_settings(session)


@router.post("", response_model=SuccessResponse)
async def save_settings(
    values: Annotated[dict[str, str], Body()],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SuccessResponse:
    """Insert or replace each posted key/value pair."""
    await upsert_settings(session, values)
    return SuccessResponse(success=True)
