"""Message history endpoint - GET /messages."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.engine import get_session
from legalmind.db.turns import list_turns
from legalmind.models.memory import Turn

router = APIRouter(prefix="/messages", tags=["messages"])


class MessageListResponse(BaseModel):
    """Response for GET /messages."""

    messages: list[Turn]


@router.get("", response_model=MessageListResponse)
async def get_messages(
    session: Annotated[AsyncSession, Depends(get_session)],
    case_id: Annotated[str, Query(alias="caseId", min_length=1)],
) -> MessageListResponse:
    """List a case's dialogue in chronological order."""
    return MessageListResponse(messages=await list_turns(session, case_id))
