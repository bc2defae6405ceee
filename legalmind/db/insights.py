"""Repository functions for saved insights, arguments and todos."""

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.models import SavedInsight
from legalmind.models.memory import InsightCategory, InsightEntry


def _to_entry(row: SavedInsight) -> InsightEntry:
    return InsightEntry(
        id=row.id,
        case_id=row.case_id,
        content=row.content,
        category=row.category,  # type: ignore[arg-type]
        created_at=row.created_at,
        completed=row.completed,
    )


async def create_insight(
    session: AsyncSession,
    *,
    case_id: str,
    content: str,
    category: InsightCategory,
    tags: str | None = None,
) -> InsightEntry:
    """Create a saved entry and commit it."""
    row = SavedInsight(
        case_id=case_id,
        content=content,
        category=category,
        tags=tags,
        created_at=datetime.now(timezone.utc),
        completed=False,
    )
    session.add(row)
    await session.flush()
    entry = _to_entry(row)
    await session.commit()
    return entry


async def list_insights(
    session: AsyncSession, case_id: str, category: InsightCategory
) -> list[InsightEntry]:
    """List entries of one category for a case, newest first."""
    query = (
        select(SavedInsight)
        .where(SavedInsight.case_id == case_id, SavedInsight.category == category)
        .order_by(SavedInsight.created_at.desc(), SavedInsight.id.desc())
    )
    result = await session.execute(query)
    return [_to_entry(row) for row in result.scalars().all()]


async def set_completed(session: AsyncSession, insight_id: int, completed: bool) -> bool:
    """Toggle the completed flag (used by todos).

    Returns:
        True if the entry existed
    """
    row = await session.get(SavedInsight, insight_id)
    if row is None:
        return False

    row.completed = completed
    await session.commit()
    return True


async def delete_insight(session: AsyncSession, insight_id: int) -> None:
    """Delete an entry by ID (no-op when missing)."""
    await session.execute(delete(SavedInsight).where(SavedInsight.id == insight_id))
    await session.commit()
