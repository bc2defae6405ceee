"""Tests for context bundle composition and system prompt rendering."""

from datetime import datetime, timedelta

from legalmind.context.assembler import (
    NO_ARGUMENTS,
    NO_EVIDENCE,
    NO_INSIGHTS,
    build_context_bundle,
    conversation_messages,
    render_evidence,
    render_system_prompt,
)
from legalmind.models.assistant import AssistantConfig
from legalmind.models.memory import Document, EvidenceRole, InsightEntry, Turn, TurnRole

BASE_TIME = datetime(2025, 3, 1, 9, 0, 0)


def _turn(n: int) -> Turn:
    return Turn(
        id=n,
        case_id="case-1",
        role=TurnRole.user if n % 2 else TurnRole.assistant,
        content=f"T{n}",
        timestamp=BASE_TIME + timedelta(minutes=n),
    )


def _entry(n: int, category: str, content: str) -> InsightEntry:
    return InsightEntry(
        id=n,
        case_id="case-1",
        content=content,
        category=category,  # type: ignore[arg-type]
        created_at=BASE_TIME + timedelta(hours=n),
    )


def _empty_bundle(config: AssistantConfig | None = None, **overrides):  # type: ignore[no-untyped-def]
    params = {
        "config": config or AssistantConfig(),
        "evidence_by_role": {EvidenceRole.plaintiff: [], EvidenceRole.opposition: []},
        "insights": [],
        "arguments": [],
        "recent_turns_newest_first": [],
    }
    params.update(overrides)
    return build_context_bundle(**params)


def test_turn_window_is_reversed_to_chronological_order() -> None:
    """Test that newest-first storage order becomes oldest-first."""
    all_turns = [_turn(n) for n in range(1, 8)]  # T1..T7
    newest_first_window = list(reversed(all_turns))[:6]  # T7..T2

    bundle = _empty_bundle(recent_turns_newest_first=newest_first_window)

    assert [t.content for t in bundle.turns] == ["T2", "T3", "T4", "T5", "T6", "T7"]
    assert conversation_messages(bundle)[0] == {"role": "assistant", "content": "T2"}


def test_empty_case_renders_placeholders() -> None:
    """Test that every section degrades to placeholder text."""
    prompt = render_system_prompt(_empty_bundle())

    assert f"### Evidence Context\n{NO_EVIDENCE}" in prompt
    assert f"### Key Insights\n{NO_INSIGHTS}" in prompt
    assert f"### Saved Arguments\n{NO_ARGUMENTS}" in prompt


def test_arguments_placeholder_present_when_insights_exist() -> None:
    """Test the arguments section is never dropped."""
    bundle = _empty_bundle(insights=[_entry(1, "insight", "Timeline is key")])

    prompt = render_system_prompt(bundle)

    assert "• (2025-03-01 10:00:00) Timeline is key" in prompt
    assert f"### Saved Arguments\n{NO_ARGUMENTS}" in prompt


def test_sections_render_in_fixed_order() -> None:
    """Test identity, overlay, repositories, evidence, insights, arguments order."""
    bundle = _empty_bundle(
        config=AssistantConfig(custom_system_prompt="Answer in plain English."),
        evidence_by_role={
            EvidenceRole.plaintiff: [Document(id="d1", content="Signed lease")],
            EvidenceRole.opposition: [],
        },
        insights=[_entry(1, "insight", "Lease was signed")],
        arguments=[_entry(2, "argument", "Tenant defaulted")],
    )

    prompt = render_system_prompt(bundle)

    markers = [
        "You are LegalMind",
        "### User Custom System Instruction\nAnswer in plain English.",
        "### Repositories",
        "### Evidence Context",
        "### Key Insights",
        "### Saved Arguments",
    ]
    positions = [prompt.index(marker) for marker in markers]
    assert positions == sorted(positions)


def test_overlay_absent_when_not_configured() -> None:
    """Test that no overlay heading appears without a custom prompt."""
    assert "User Custom System Instruction" not in render_system_prompt(_empty_bundle())


def test_role_without_matches_has_no_heading() -> None:
    """Test that empty roles are omitted rather than rendered empty."""
    bundle = _empty_bundle(
        evidence_by_role={
            EvidenceRole.plaintiff: [],
            EvidenceRole.opposition: [
                Document(id="d1", content="Email one"),
                Document(id="d2", content="Email two"),
            ],
        }
    )

    evidence = render_evidence(bundle)

    assert evidence == "\nOpposition Evidence:\nEmail one\n\nEmail two"
    assert "Plaintiff Evidence" not in render_system_prompt(bundle)
    assert NO_EVIDENCE not in render_system_prompt(bundle)


def test_entries_keep_given_newest_first_order() -> None:
    """Test that insights render in the order they were loaded."""
    bundle = _empty_bundle(
        insights=[_entry(2, "insight", "newer"), _entry(1, "insight", "older")]
    )

    prompt = render_system_prompt(bundle)

    assert prompt.index("newer") < prompt.index("older")
