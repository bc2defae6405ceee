"""Models package - re-exports for convenience."""

from legalmind.models.assistant import AssistantConfig
from legalmind.models.memory import (
    ChatReply,
    ContextBundle,
    Document,
    EvidenceRole,
    IngestResult,
    InsightCategory,
    InsightEntry,
    RankedDocument,
    Turn,
    TurnRole,
)

__all__ = [
    "AssistantConfig",
    "ChatReply",
    "ContextBundle",
    "Document",
    "EvidenceRole",
    "IngestResult",
    "InsightCategory",
    "InsightEntry",
    "RankedDocument",
    "Turn",
    "TurnRole",
]
