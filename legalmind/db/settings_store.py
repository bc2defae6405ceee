"""Repository functions for user-editable settings."""

from collections.abc import Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.models import Setting


async def get_all_settings(session: AsyncSession) -> dict[str, str]:
    """Return every stored setting as a plain dict."""
    result = await session.execute(select(Setting))
    return {row.key: row.value for row in result.scalars().all()}


async def upsert_settings(session: AsyncSession, values: Mapping[str, str]) -> None:
    """Insert or replace each key/value pair in one transaction."""
    for key, value in values.items():
        row = await session.get(Setting, key)
        if row is None:
            session.add(Setting(key=key, value=value))
        else:
            row.value = value
    await session.commit()
