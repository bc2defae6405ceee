"""Memory domain models - documents, turns, saved reasoning and context bundles."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class EvidenceRole(str, Enum):
    """Origin classification of an evidence document."""

    plaintiff = "plaintiff"
    opposition = "opposition"


class TurnRole(str, Enum):
    """Speaker of a dialogue turn."""

    user = "user"
    assistant = "assistant"


InsightCategory = Literal["insight", "argument", "todo"]


class Document(BaseModel):
    """Single ingested unit of evidence stored in a collection."""

    id: str
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class RankedDocument(BaseModel):
    """Document with its lexical relevance score and distance."""

    document: Document
    score: int
    distance: float


class IngestResult(BaseModel):
    """Outcome of an ingestion attempt.

    A duplicate is a defined outcome, not an error: ``document_id`` then points
    at the document stored by the first upload of the same bytes.
    """

    accepted: bool
    duplicate: bool
    document_id: str
    evidence_id: str
    filename: str
    checksum: str


class Turn(BaseModel):
    """One persisted message in a case dialogue."""

    id: int
    case_id: str
    role: TurnRole
    content: str
    timestamp: datetime


class InsightEntry(BaseModel):
    """Saved piece of case reasoning."""

    id: int
    case_id: str
    content: str
    category: InsightCategory
    created_at: datetime
    completed: bool = False


class ContextBundle(BaseModel):
    """Per-query composite handed to the generation step. Never persisted."""

    base_identity: str
    overlay: str | None = None
    evidence: dict[str, str] = Field(
        default_factory=dict, description="Role label -> joined document contents, in role order"
    )
    insights: list[InsightEntry] = Field(default_factory=list)
    arguments: list[InsightEntry] = Field(default_factory=list)
    turns: list[Turn] = Field(default_factory=list, description="Chronological, oldest first")


class ChatReply(BaseModel):
    """Persisted assistant reply returned to the caller."""

    turn_id: int
    response: str
