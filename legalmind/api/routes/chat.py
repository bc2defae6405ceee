"""Chat endpoint - POST /chat."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.api.deps import get_assistant_config, get_collection_store
from legalmind.db.engine import get_session
from legalmind.errors import MalformedInputError
from legalmind.memory.collections import CollectionStore
from legalmind.models.assistant import AssistantConfig
from legalmind.orchestration.dialogue import handle_message

router = APIRouter(prefix="/chat", tags=["chat"])
logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    """Request body for POST /chat."""

    model_config = ConfigDict(populate_by_name=True)

    case_id: str = Field(..., alias="caseId", min_length=1)
    message: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    """Response for POST /chat."""

    model_config = ConfigDict(populate_by_name=True)

    message_id: int = Field(..., alias="messageId")
    response: str


@router.post("", response_model=ChatResponse)
async def post_chat(
    request: ChatRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    store: Annotated[CollectionStore, Depends(get_collection_store)],
    config: Annotated[AssistantConfig, Depends(get_assistant_config)],
) -> ChatResponse:
    """Answer a user message for a case.

    Raises:
        HTTPException: 400 for malformed input, 500 on storage failure
    """
    try:
        reply = await handle_message(
            case_id=request.case_id,
            message=request.message,
            session=session,
            store=store,
            config=config,
        )
    except MalformedInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"[POST /chat] case_id={request.case_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process message",
        ) from e

    return ChatResponse(message_id=reply.turn_id, response=reply.response)
