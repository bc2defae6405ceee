"""Repository functions for case workspaces."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.models import Case


async def create_case(
    session: AsyncSession,
    *,
    title: str,
    description: str | None = None,
    case_id: str | None = None,
) -> Case:
    """Create a new case.

    Args:
        session: Database session
        title: Case title
        description: Optional free-text description
        case_id: Explicit identifier (generated when omitted)

    Returns:
        Persisted Case row
    """
    case = Case(id=case_id or f"case-{uuid.uuid4()}", title=title, description=description)
    session.add(case)
    await session.commit()
    await session.refresh(case)
    return case


async def list_cases(session: AsyncSession) -> list[Case]:
    """List all cases, newest first."""
    result = await session.execute(select(Case).order_by(Case.created_at.desc()))
    return list(result.scalars().all())


async def get_case(session: AsyncSession, case_id: str) -> Case | None:
    """Get a case by ID."""
    return await session.get(Case, case_id)


async def ensure_default_case(session: AsyncSession) -> Case | None:
    """Seed a sample case when the store has none.

    Returns:
        The created case, or None if cases already exist
    """
    count = await session.scalar(select(func.count()).select_from(Case))
    if count:
        return None

    return await create_case(
        session,
        title="Sample Case",
        description="Your first legal case workspace",
        case_id=f"default-case-{uuid.uuid4()}",
    )
