"""Dialogue orchestrator - persists turns and drives retrieval and generation.

Per message: persist the user turn, classify it, then either commit the last
assistant answer as an insight or assemble context and generate (falling
back to the offline templates on any generation failure), and finally
persist the assistant turn.
"""

import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession

from legalmind.config import Settings, get_settings
from legalmind.context.assembler import (
    assemble_context,
    conversation_messages,
    render_evidence,
    render_system_prompt,
)
from legalmind.db.insights import create_insight
from legalmind.db.turns import append_turn, last_assistant_turn
from legalmind.errors import GenerationUnavailableError, MalformedInputError
from legalmind.llm.client import GenerationClient, get_generation_client
from legalmind.llm.fallback import fallback_response
from legalmind.memory.collections import CollectionStore
from legalmind.models.assistant import AssistantConfig
from legalmind.models.memory import ChatReply, ContextBundle, TurnRole
from legalmind.orchestration.directives import Directive, classify_directive
from legalmind.utils.logging import StructuredGenerationLogger
from legalmind.utils.metrics import metrics

logger = logging.getLogger(__name__)
generation_logger = StructuredGenerationLogger()

COMMIT_ACKNOWLEDGEMENT = (
    "✓ I've saved that insight for you. You can find it in the 'Key Insights' tab."
)


async def generate_response(
    *,
    case_id: str,
    message: str,
    bundle: ContextBundle,
    config: AssistantConfig,
    client: GenerationClient | None = None,
    settings: Settings | None = None,
) -> str:
    """Generate a reply for the current message, never raising.

    Args:
        case_id: Case being discussed (for logging)
        message: Current user message
        bundle: Assembled context
        config: Assistant configuration (credential)
        client: Explicit generation client (defaults to the configured backend)
        settings: Settings override

    Returns:
        Generated text, or the deterministic fallback text
    """
    evidence_text = render_evidence(bundle)

    if client is None:
        try:
            client = get_generation_client(config, settings)
        except GenerationUnavailableError as e:
            generation_logger.log_generation(case_id, "fallback", "no_credential", 0.0, str(e))
            metrics.inc_fallback("no_credential")
            return fallback_response(message, evidence_text)

    turns = [*conversation_messages(bundle), {"role": TurnRole.user.value, "content": message}]

    start = time.perf_counter()
    try:
        text = await client.complete(render_system_prompt(bundle), turns)
    except Exception as e:
        latency_ms = (time.perf_counter() - start) * 1000
        generation_logger.log_generation(case_id, client.source, "error", latency_ms, str(e))
        metrics.record_generation(client.source, "error", latency_ms)
        metrics.inc_fallback("error")
        return fallback_response(message, evidence_text)

    latency_ms = (time.perf_counter() - start) * 1000
    generation_logger.log_generation(case_id, client.source, "success", latency_ms)
    metrics.record_generation(client.source, "success", latency_ms)
    return text


async def handle_message(
    *,
    case_id: str,
    message: str,
    session: AsyncSession,
    store: CollectionStore,
    config: AssistantConfig,
    client: GenerationClient | None = None,
    settings: Settings | None = None,
) -> ChatReply:
    """Handle one incoming user message.

    The user turn is committed before anything else so it survives any
    later failure. Storage errors propagate to the caller.

    Args:
        case_id: Case being discussed
        message: Raw user message
        session: Async database session
        store: Collection store holding evidence
        config: Assistant configuration built from settings
        client: Explicit generation client (defaults to the configured backend)
        settings: Settings override

    Returns:
        ChatReply with the persisted assistant turn ID and text

    Raises:
        MalformedInputError: Missing case ID or message
    """
    if not case_id or not message or not message.strip():
        raise MalformedInputError("caseId and message are required")

    settings = settings or get_settings()

    user_turn = await append_turn(session, case_id=case_id, role=TurnRole.user, content=message)

    if classify_directive(message) is Directive.commit:
        last_answer = await last_assistant_turn(session, case_id)
        if last_answer is not None:
            await create_insight(
                session, case_id=case_id, content=last_answer.content, category="insight"
            )
            logger.info(f"Saved assistant turn {last_answer.id} as insight for case {case_id}")
            reply = await append_turn(
                session,
                case_id=case_id,
                role=TurnRole.assistant,
                content=COMMIT_ACKNOWLEDGEMENT,
            )
            return ChatReply(turn_id=reply.id, response=reply.content)

        logger.info(f"Commit directive with no prior answer in case {case_id}; answering normally")

    bundle = await assemble_context(
        case_id=case_id,
        query=message,
        session=session,
        store=store,
        config=config,
        window_size=settings.conversation_window,
        top_n=settings.retrieval_top_n,
        exclude_turn_id=user_turn.id,
    )

    response = await generate_response(
        case_id=case_id,
        message=message,
        bundle=bundle,
        config=config,
        client=client,
        settings=settings,
    )

    reply = await append_turn(
        session, case_id=case_id, role=TurnRole.assistant, content=response
    )
    return ChatReply(turn_id=reply.id, response=reply.content)
