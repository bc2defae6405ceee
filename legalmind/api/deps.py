"""Shared FastAPI dependencies."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.config import get_settings
from legalmind.db.engine import get_session
from legalmind.db.settings_store import get_all_settings
from legalmind.memory.collections import CollectionStore, JsonCollectionStore
from legalmind.models.assistant import AssistantConfig


@lru_cache
def get_collection_store() -> CollectionStore:
    """Get the process-wide collection store."""
    return JsonCollectionStore(get_settings().collections_dir)


async def get_assistant_config(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AssistantConfig:
    """Build assistant configuration from the settings table for this request."""
    return AssistantConfig.from_settings(await get_all_settings(session))
