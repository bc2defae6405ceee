"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.api.deps import get_collection_store
from legalmind.api.routes.baserow import router as baserow_router
from legalmind.api.routes.cases import router as cases_router
from legalmind.api.routes.chat import router as chat_router
from legalmind.api.routes.evidence import router as evidence_router
from legalmind.api.routes.health import router as health_router
from legalmind.api.routes.insights import router as insights_router
from legalmind.api.routes.messages import router as messages_router
from legalmind.api.routes.metrics import router as metrics_router
from legalmind.api.routes.settings import router as settings_router
from legalmind.db.cases import ensure_default_case
from legalmind.db.engine import get_async_engine, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Bootstrap the local database and seed a sample case."""
    engine = get_async_engine()
    await init_db(engine)
    async with AsyncSession(engine, expire_on_commit=False) as session:
        seeded = await ensure_default_case(session)
        if seeded is not None:
            logger.info(f"Seeded default case {seeded.id}")
    # Opens (and creates) the collections directory
    get_collection_store()
    yield


app = FastAPI(title="LegalMind API", version="0.1.0", lifespan=lifespan)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(cases_router, tags=["cases"])
app.include_router(messages_router, tags=["messages"])
app.include_router(chat_router, tags=["chat"])
app.include_router(evidence_router, tags=["evidence"])
app.include_router(insights_router, tags=["insights"])
app.include_router(settings_router, tags=["settings"])
app.include_router(baserow_router, tags=["integrations"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "LegalMind API", "version": "0.1.0"}
