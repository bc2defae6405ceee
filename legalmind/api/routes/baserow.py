"""Baserow connection test endpoint - POST /baserow/test."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from legalmind.adapters.baserow import BaserowProbe, probe_connection
from legalmind.config import get_settings

router = APIRouter(prefix="/baserow", tags=["integrations"])


class BaserowTestRequest(BaseModel):
    """Request body for POST /baserow/test."""

    url: str = Field(..., min_length=1, description="Baserow base URL")
    token: str = Field(..., min_length=1, description="Baserow database token")


@router.post("/test", response_model=BaserowProbe)
async def test_baserow(request: BaserowTestRequest) -> BaserowProbe:
    """Probe a Baserow instance; failures are reported, not raised."""
    return await probe_connection(
        request.url,
        request.token,
        timeout_seconds=get_settings().baserow_timeout_seconds,
    )
