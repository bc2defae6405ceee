"""Repository functions for dialogue turns."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.models import Message
from legalmind.models.memory import Turn, TurnRole


def _to_turn(row: Message) -> Turn:
    return Turn(
        id=row.id,
        case_id=row.case_id,
        role=TurnRole(row.role),
        content=row.content,
        timestamp=row.timestamp,
    )


async def append_turn(
    session: AsyncSession,
    *,
    case_id: str,
    role: TurnRole,
    content: str,
    timestamp: datetime | None = None,
) -> Turn:
    """Append a turn and commit it.

    Each turn is its own transaction so a persisted turn is never lost
    to a later failure in the same request.

    Args:
        session: Database session
        case_id: Owning case
        role: Speaker
        content: Message text
        timestamp: Explicit timestamp (defaults to now, UTC)

    Returns:
        The persisted turn
    """
    row = Message(
        case_id=case_id,
        role=role.value,
        content=content,
        timestamp=timestamp or datetime.now(timezone.utc),
    )
    session.add(row)
    await session.flush()
    turn = _to_turn(row)
    await session.commit()
    return turn


async def list_turns(session: AsyncSession, case_id: str) -> list[Turn]:
    """List all turns for a case in chronological order."""
    query = (
        select(Message)
        .where(Message.case_id == case_id)
        .order_by(Message.timestamp.asc(), Message.id.asc())
    )
    result = await session.execute(query)
    return [_to_turn(row) for row in result.scalars().all()]


async def recent_turns(
    session: AsyncSession,
    case_id: str,
    limit: int,
    *,
    exclude_id: int | None = None,
) -> list[Turn]:
    """Load the most recent turns for a case, newest first.

    Args:
        session: Database session
        case_id: Owning case
        limit: Maximum number of turns
        exclude_id: Turn to leave out (the message currently being answered)

    Returns:
        Up to ``limit`` turns in storage-native newest-first order
    """
    if limit <= 0:
        return []

    query = select(Message).where(Message.case_id == case_id)
    if exclude_id is not None:
        query = query.where(Message.id != exclude_id)
    query = query.order_by(Message.timestamp.desc(), Message.id.desc()).limit(limit)

    result = await session.execute(query)
    return [_to_turn(row) for row in result.scalars().all()]


async def last_assistant_turn(session: AsyncSession, case_id: str) -> Turn | None:
    """Get the most recent assistant turn for a case, if any."""
    query = (
        select(Message)
        .where(Message.case_id == case_id, Message.role == TurnRole.assistant.value)
        .order_by(Message.timestamp.desc(), Message.id.desc())
        .limit(1)
    )
    result = await session.execute(query)
    row = result.scalars().first()
    return _to_turn(row) if row is not None else None
