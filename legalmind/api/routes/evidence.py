"""Evidence endpoints - GET /evidence, POST /evidence (upload), DELETE /evidence."""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.api.deps import get_collection_store
from legalmind.db.engine import get_session
from legalmind.db.evidence import list_evidence
from legalmind.errors import MalformedInputError
from legalmind.memory.collections import CollectionStore
from legalmind.memory.ingest import ingest_evidence, remove_evidence

router = APIRouter(prefix="/evidence", tags=["evidence"])
logger = logging.getLogger(__name__)


class EvidenceItem(BaseModel):
    """Evidence metadata record."""

    id: str
    case_id: str
    filename: str
    filepath: str
    memory_type: str
    checksum: str
    document_id: str
    uploaded_at: datetime


class EvidenceListResponse(BaseModel):
    """Response for GET /evidence."""

    evidence: list[EvidenceItem]


class EvidenceUploadResponse(BaseModel):
    """Response for POST /evidence.

    Accepted uploads carry ``id``/``filename``; duplicates carry
    ``message``/``existingId``. Both carry ``documentId``.
    """

    model_config = ConfigDict(populate_by_name=True)

    duplicate: bool
    document_id: str = Field(..., alias="documentId")
    id: str | None = None
    filename: str | None = None
    message: str | None = None
    existing_id: str | None = Field(None, alias="existingId")


class DeleteResponse(BaseModel):
    """Response for DELETE /evidence."""

    success: bool


@router.get("", response_model=EvidenceListResponse)
async def get_evidence_list(
    session: Annotated[AsyncSession, Depends(get_session)],
    case_id: Annotated[str, Query(alias="caseId", min_length=1)],
) -> EvidenceListResponse:
    """List evidence for a case, newest upload first."""
    rows = await list_evidence(session, case_id)
    return EvidenceListResponse(
        evidence=[
            EvidenceItem(
                id=row.id,
                case_id=row.case_id,
                filename=row.filename,
                filepath=row.filepath,
                memory_type=row.memory_type,
                checksum=row.checksum,
                document_id=row.document_id,
                uploaded_at=row.uploaded_at,
            )
            for row in rows
        ]
    )


@router.post("", response_model=EvidenceUploadResponse, response_model_exclude_none=True)
async def upload_evidence(
    session: Annotated[AsyncSession, Depends(get_session)],
    store: Annotated[CollectionStore, Depends(get_collection_store)],
    file: Annotated[UploadFile | None, File()] = None,
    case_id: Annotated[str | None, Form(alias="caseId")] = None,
    memory_type: Annotated[str | None, Form(alias="memoryType")] = None,
) -> EvidenceUploadResponse:
    """Upload an evidence file into a case's plaintiff or opposition memory.

    Re-uploading identical bytes is a no-op that reports the existing record.

    Raises:
        HTTPException: 400 for missing fields or unknown memory type
    """
    if file is None or not case_id or not memory_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields"
        )

    raw = await file.read()

    try:
        result = await ingest_evidence(
            raw=raw,
            filename=file.filename or "upload",
            role=memory_type,
            case_id=case_id,
            session=session,
            store=store,
        )
    except MalformedInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"[POST /evidence] case_id={case_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload evidence",
        ) from e

    if result.duplicate:
        return EvidenceUploadResponse(
            duplicate=True,
            document_id=result.document_id,
            message="Duplicate upload detected",
            existing_id=result.evidence_id,
        )

    return EvidenceUploadResponse(
        duplicate=False,
        document_id=result.document_id,
        id=result.evidence_id,
        filename=result.filename,
    )


@router.delete("", response_model=DeleteResponse)
async def delete_evidence_record(
    session: Annotated[AsyncSession, Depends(get_session)],
    store: Annotated[CollectionStore, Depends(get_collection_store)],
    evidence_id: Annotated[str, Query(alias="id", min_length=1)],
) -> DeleteResponse:
    """Delete evidence, its stored file and its retrievable document.

    Raises:
        HTTPException: 404 if the evidence does not exist
    """
    removed = await remove_evidence(evidence_id=evidence_id, session=session, store=store)
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Evidence not found")
    return DeleteResponse(success=True)
