"""Saved insight endpoints - GET/POST/PATCH/DELETE /insights."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.engine import get_session
from legalmind.db.insights import create_insight, delete_insight, list_insights, set_completed
from legalmind.models.memory import InsightCategory, InsightEntry

router = APIRouter(prefix="/insights", tags=["insights"])


class InsightListResponse(BaseModel):
    """Response for GET /insights."""

    insights: list[InsightEntry]


class CreateInsightRequest(BaseModel):
    """Request body for POST /insights."""

    model_config = ConfigDict(populate_by_name=True)

    case_id: str = Field(..., alias="caseId", min_length=1)
    content: str = Field(..., min_length=1)
    category: InsightCategory


class CreateInsightResponse(BaseModel):
    """Response for POST /insights."""

    id: int


class UpdateInsightRequest(BaseModel):
    """Request body for PATCH /insights."""

    id: int
    completed: bool


class SuccessResponse(BaseModel):
    """Generic success flag."""

    success: bool


@router.get("", response_model=InsightListResponse)
async def get_insights(
    session: Annotated[AsyncSession, Depends(get_session)],
    case_id: Annotated[str, Query(alias="caseId", min_length=1)],
    category: Annotated[str, Query(pattern="^(insight|argument|todo)$")],
) -> InsightListResponse:
    """List a case's saved entries in one category, newest first."""
    return InsightListResponse(
        insights=await list_insights(session, case_id, category)  # type: ignore[arg-type]
    )


@router.post("", response_model=CreateInsightResponse)
async def post_insight(
    request: CreateInsightRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CreateInsightResponse:
    """Save an insight, argument or todo."""
    entry = await create_insight(
        session, case_id=request.case_id, content=request.content, category=request.category
    )
    return CreateInsightResponse(id=entry.id)


@router.patch("", response_model=SuccessResponse)
async def patch_insight(
    request: UpdateInsightRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SuccessResponse:
    """Mark an entry completed or not completed.

    Raises:
        HTTPException: 404 if the entry does not exist
    """
    if not await set_completed(session, request.id, request.completed):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Insight not found")
    return SuccessResponse(success=True)


@router.delete("", response_model=SuccessResponse)
async def remove_insight(
    session: Annotated[AsyncSession, Depends(get_session)],
    insight_id: Annotated[int, Query(alias="id")],
) -> SuccessResponse:
    """Delete an entry."""
    await delete_insight(session, insight_id)
    return SuccessResponse(success=True)
