"""Context assembler - layers identity, evidence, saved reasoning and dialogue history.

Loading (``assemble_context``) is separated from composition
(``build_context_bundle``) and rendering (``render_system_prompt``) so the
latter two are pure functions of their inputs.
"""

import logging
from collections.abc import Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.db.insights import list_insights
from legalmind.db.turns import recent_turns
from legalmind.memory.collections import CollectionStore, collection_key
from legalmind.memory.ranker import rank
from legalmind.models.assistant import AssistantConfig
from legalmind.models.memory import (
    ContextBundle,
    Document,
    EvidenceRole,
    InsightEntry,
    Turn,
)

logger = logging.getLogger(__name__)

DEFAULT_ROLES: tuple[EvidenceRole, ...] = (EvidenceRole.plaintiff, EvidenceRole.opposition)
DEFAULT_TOP_N = 3
DEFAULT_WINDOW_SIZE = 6

ROLE_LABELS: dict[EvidenceRole, str] = {
    EvidenceRole.plaintiff: "Plaintiff Evidence",
    EvidenceRole.opposition: "Opposition Evidence",
}

BASE_IDENTITY = """You are LegalMind, a local, privacy-first legal reasoning environment.
Maintain two cognitive modes:
• **Analytical Mode**: precise, logical reasoning grounded in evidence and law.
• **Conversational Mode**: flexible, contextually aware, adapting tone to human dialogue history.
Prioritize factual grounding, but sustain continuity with the user's ongoing narrative."""

REPOSITORIES_DESCRIPTION = """### Repositories
1. Evidence Repository: documents.
2. Insights Repository: conceptual/legal reasoning.
3. Arguments Repository: structured positions.

Your goals:
- Interpret user intent across all repositories.
- Ask clarifying questions when ambiguous.
- Maintain continuity across recent chat turns."""

NO_EVIDENCE = "No evidence currently loaded."
NO_INSIGHTS = "No saved insights yet."
NO_ARGUMENTS = "No saved arguments yet."


def build_context_bundle(
    *,
    config: AssistantConfig,
    evidence_by_role: Mapping[EvidenceRole, Sequence[Document]],
    insights: Sequence[InsightEntry],
    arguments: Sequence[InsightEntry],
    recent_turns_newest_first: Sequence[Turn],
) -> ContextBundle:
    """Compose a context bundle from already-loaded data.

    Roles without documents get no evidence entry. Turns arrive newest
    first (storage order) and are reversed so the bundle holds them
    oldest to newest.
    """
    evidence: dict[str, str] = {}
    for role, documents in evidence_by_role.items():
        if documents:
            evidence[ROLE_LABELS[role]] = "\n\n".join(doc.content for doc in documents)

    return ContextBundle(
        base_identity=BASE_IDENTITY,
        overlay=config.custom_system_prompt,
        evidence=evidence,
        insights=list(insights),
        arguments=list(arguments),
        turns=list(reversed(recent_turns_newest_first)),
    )


async def assemble_context(
    *,
    case_id: str,
    query: str,
    session: AsyncSession,
    store: CollectionStore,
    config: AssistantConfig,
    roles: Sequence[EvidenceRole] = DEFAULT_ROLES,
    window_size: int = DEFAULT_WINDOW_SIZE,
    top_n: int = DEFAULT_TOP_N,
    exclude_turn_id: int | None = None,
) -> ContextBundle:
    """Load retrieval results, saved reasoning and recent turns for a case.

    Args:
        case_id: Case being discussed
        query: Current user message (retrieval query)
        session: Async database session
        store: Collection store holding evidence documents
        config: Assistant configuration (overlay prompt)
        roles: Evidence roles to retrieve from, in section order
        window_size: Number of recent turns to include
        top_n: Documents retrieved per role
        exclude_turn_id: Turn left out of the window (the message being answered)

    Returns:
        ContextBundle ready for rendering
    """
    evidence_by_role: dict[EvidenceRole, list[Document]] = {}
    for role in roles:
        key = collection_key(role.value, case_id)
        try:
            matches = rank(store, key, query, top_n)
        except (OSError, ValueError) as e:
            # Unreadable collection: answer without this role's evidence
            logger.warning(f"Retrieval from {key} failed, continuing without it: {e}")
            matches = []
        evidence_by_role[role] = [match.document for match in matches]

    insights = await list_insights(session, case_id, "insight")
    arguments = await list_insights(session, case_id, "argument")
    turns = await recent_turns(session, case_id, window_size, exclude_id=exclude_turn_id)

    return build_context_bundle(
        config=config,
        evidence_by_role=evidence_by_role,
        insights=insights,
        arguments=arguments,
        recent_turns_newest_first=turns,
    )


def render_evidence(bundle: ContextBundle) -> str:
    """Render retrieved evidence as labelled blocks ("" when nothing matched)."""
    return "".join(f"\n{label}:\n{text}" for label, text in bundle.evidence.items())


def _render_entries(entries: Sequence[InsightEntry], placeholder: str) -> str:
    if not entries:
        return placeholder
    return "\n".join(
        f"• ({entry.created_at.strftime('%Y-%m-%d %H:%M:%S')}) {entry.content}"
        for entry in entries
    )


def render_system_prompt(bundle: ContextBundle) -> str:
    """Render the system prompt.

    Section order is fixed: identity, overlay, repositories, evidence,
    insights, arguments.
    """
    parts = [bundle.base_identity]

    if bundle.overlay:
        parts.append(f"### User Custom System Instruction\n{bundle.overlay}")

    parts.append(REPOSITORIES_DESCRIPTION)
    parts.append(f"### Evidence Context\n{render_evidence(bundle) or NO_EVIDENCE}")
    parts.append(f"### Key Insights\n{_render_entries(bundle.insights, NO_INSIGHTS)}")
    parts.append(f"### Saved Arguments\n{_render_entries(bundle.arguments, NO_ARGUMENTS)}")

    return "\n\n".join(parts) + "\n"


def conversation_messages(bundle: ContextBundle) -> list[dict[str, str]]:
    """Chronological turn window as role/content pairs."""
    return [{"role": turn.role.value, "content": turn.content} for turn in bundle.turns]
