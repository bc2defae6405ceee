"""Case endpoints - GET /cases, POST /cases."""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.cases import create_case, list_cases
from legalmind.db.engine import get_session

router = APIRouter(prefix="/cases", tags=["cases"])
logger = logging.getLogger(__name__)


class CreateCaseRequest(BaseModel):
    """Request body for POST /cases."""

    title: str = Field(..., min_length=1, max_length=200, description="Case title")
    description: str | None = Field(None, description="Optional case description")


class CaseItem(BaseModel):
    """Single case."""

    id: str
    title: str
    description: str | None = None
    created_at: datetime | None = None


class CaseListResponse(BaseModel):
    """Response for GET /cases."""

    cases: list[CaseItem]


@router.get("", response_model=CaseListResponse)
async def get_cases(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CaseListResponse:
    """List all cases, newest first."""
    cases = await list_cases(session)
    return CaseListResponse(
        cases=[
            CaseItem(
                id=case.id,
                title=case.title,
                description=case.description,
                created_at=case.created_at,
            )
            for case in cases
        ]
    )


@router.post("", response_model=CaseItem)
async def post_case(
    request: CreateCaseRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CaseItem:
    """Create a new case workspace."""
    case = await create_case(session, title=request.title, description=request.description)
    logger.info(f"[POST /cases] created {case.id}")
    return CaseItem(
        id=case.id,
        title=case.title,
        description=case.description,
        created_at=case.created_at,
    )
