"""Evidence ingestion - fingerprint, deduplicate, store (ingestion gate)."""

import hashlib
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.config import Settings, get_settings
from legalmind.db.evidence import add_evidence, delete_evidence, find_by_checksum, get_evidence
from legalmind.db.models import Evidence
from legalmind.errors import MalformedInputError
from legalmind.memory.collections import CollectionStore, collection_key
from legalmind.models.memory import Document, EvidenceRole, IngestResult
from legalmind.utils.metrics import metrics

logger = logging.getLogger(__name__)


def fingerprint(raw: bytes) -> str:
    """SHA-256 hex digest of the raw upload bytes."""
    return hashlib.sha256(raw).hexdigest()


def extract_text(raw: bytes, max_chars: int) -> str:
    """Decode upload bytes as UTF-8 and truncate to ``max_chars``."""
    return raw.decode("utf-8", errors="replace")[:max_chars]


def _validate(raw: bytes, filename: str, role: str, case_id: str) -> EvidenceRole:
    if not raw:
        raise MalformedInputError("Uploaded file is empty")
    if not filename:
        raise MalformedInputError("Missing filename")
    if not case_id:
        raise MalformedInputError("Missing caseId")
    try:
        return EvidenceRole(role)
    except ValueError as e:
        raise MalformedInputError(f"Unknown memory type: {role!r}") from e


async def ingest_evidence(
    *,
    raw: bytes,
    filename: str,
    role: str,
    case_id: str,
    session: AsyncSession,
    store: CollectionStore,
    settings: Settings | None = None,
) -> IngestResult:
    """Ingest an uploaded evidence file.

    The fingerprint is taken over the raw bytes before any decoding or
    truncation and checked against every previously accepted upload, in
    any case or role. A duplicate returns the first upload's document and
    writes nothing.

    On acceptance the file is saved to the evidence directory, its text is
    appended to the ``{role}_{case_id}`` collection (retrievable at once)
    and an evidence row records the checksum and document ID.

    Args:
        raw: Uploaded file bytes
        filename: Original filename
        role: Evidence role (plaintiff or opposition)
        case_id: Owning case
        session: Async database session
        store: Collection store receiving the document
        settings: Settings override (defaults to cached settings)

    Returns:
        IngestResult describing the stored or existing document

    Raises:
        MalformedInputError: Missing fields or unknown role
    """
    settings = settings or get_settings()
    memory_type = _validate(raw, filename, role, case_id)

    checksum = fingerprint(raw)
    existing = await find_by_checksum(session, checksum)
    if existing is not None:
        logger.info(f"Duplicate upload detected for {filename}, existing evidence {existing.id}")
        metrics.inc_ingest("duplicate")
        return IngestResult(
            accepted=False,
            duplicate=True,
            document_id=existing.document_id,
            evidence_id=existing.id,
            filename=existing.filename,
            checksum=checksum,
        )

    # Save raw file to disk
    evidence_dir = Path(settings.evidence_dir)
    evidence_dir.mkdir(parents=True, exist_ok=True)
    safe_name = Path(filename).name
    evidence_id = f"evidence-{uuid.uuid4()}"
    filepath = evidence_dir / f"{evidence_id}-{safe_name}"
    filepath.write_bytes(raw)

    document = Document(
        id=f"doc-{uuid.uuid4()}",
        content=extract_text(raw, settings.max_document_chars),
        metadata={"filename": safe_name, "type": memory_type.value, "checksum": checksum},
    )
    key = collection_key(memory_type.value, case_id)
    appended = False

    try:
        store.append(key, document)
        appended = True
        await add_evidence(
            session,
            Evidence(
                id=evidence_id,
                case_id=case_id,
                filename=safe_name,
                filepath=str(filepath),
                memory_type=memory_type.value,
                checksum=checksum,
                document_id=document.id,
                uploaded_at=datetime.now(timezone.utc),
            ),
        )
    except Exception:
        # No fingerprint row means no document: undo the partial write
        logger.error(f"Ingestion of {safe_name} failed, rolling back", exc_info=True)
        await session.rollback()
        if appended:
            store.remove(key, document.id)
        filepath.unlink(missing_ok=True)
        raise

    logger.info(f"Ingested {safe_name} into {key}")
    metrics.inc_ingest("accepted")

    return IngestResult(
        accepted=True,
        duplicate=False,
        document_id=document.id,
        evidence_id=evidence_id,
        filename=safe_name,
        checksum=checksum,
    )


async def remove_evidence(
    *,
    evidence_id: str,
    session: AsyncSession,
    store: CollectionStore,
) -> bool:
    """Remove an evidence record, its file on disk and its collection document.

    Returns:
        True if the evidence existed
    """
    evidence = await get_evidence(session, evidence_id)
    if evidence is None:
        return False

    Path(evidence.filepath).unlink(missing_ok=True)
    store.remove(collection_key(evidence.memory_type, evidence.case_id), evidence.document_id)
    await delete_evidence(session, evidence)
    return True
