"""Repository functions for evidence metadata."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.models import Evidence


async def find_by_checksum(session: AsyncSession, checksum: str) -> Evidence | None:
    """Look up evidence by content fingerprint across all cases."""
    result = await session.execute(select(Evidence).where(Evidence.checksum == checksum))
    return result.scalars().first()


async def add_evidence(session: AsyncSession, evidence: Evidence) -> Evidence:
    """Insert an evidence row and commit it."""
    session.add(evidence)
    await session.commit()
    return evidence


async def list_evidence(session: AsyncSession, case_id: str) -> list[Evidence]:
    """List evidence for a case, newest upload first."""
    query = (
        select(Evidence)
        .where(Evidence.case_id == case_id)
        .order_by(Evidence.uploaded_at.desc())
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def get_evidence(session: AsyncSession, evidence_id: str) -> Evidence | None:
    """Get evidence by ID."""
    return await session.get(Evidence, evidence_id)


async def delete_evidence(session: AsyncSession, evidence: Evidence) -> None:
    """Delete an evidence row and commit."""
    await session.delete(evidence)
    await session.commit()
