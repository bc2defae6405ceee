"""Deterministic offline responses used when no generation backend answers."""

EVIDENCE_KEYWORDS = ("evidence", "document")
ARGUMENT_KEYWORDS = ("argument", "position")

EVIDENCE_PREVIEW_CHARS = 300

NO_EVIDENCE_RESPONSE = (
    "No evidence has been uploaded yet. Please upload documents in the Evidence tab "
    "to enable AI analysis."
)

ARGUMENT_RESPONSE = (
    "To build a strong legal argument, we should:\n\n"
    "1. Review all available evidence\n"
    "2. Identify key facts and timeline\n"
    "3. Research relevant case law\n"
    "4. Develop counterarguments\n\n"
    "(Offline response - configure an OpenAI API key for full analysis)"
)


def fallback_response(query: str, evidence_text: str) -> str:
    """Build a template response for a query.

    Pure function: no I/O, no randomness, never raises. Buckets are checked
    in order and the first match wins: evidence/document, then
    argument/position, then generic guidance.

    Args:
        query: User message
        evidence_text: Rendered evidence context ("" when none was retrieved)

    Returns:
        Response text
    """
    lowered = query.lower()

    if any(keyword in lowered for keyword in EVIDENCE_KEYWORDS):
        if not evidence_text:
            return NO_EVIDENCE_RESPONSE
        return (
            "Based on the evidence, here's my analysis:\n\n"
            f"{evidence_text[:EVIDENCE_PREVIEW_CHARS]}...\n\n"
            "This is an offline response. Configure your OpenAI API key in Settings "
            "for full AI analysis."
        )

    if any(keyword in lowered for keyword in ARGUMENT_KEYWORDS):
        return ARGUMENT_RESPONSE

    return (
        f'I understand you\'re asking about: "{query}"\n\n'
        "This is an offline response. To enable full AI-powered legal analysis:\n\n"
        "1. Go to Settings tab\n"
        "2. Enter your OpenAI API key\n"
        "3. Upload evidence documents\n"
        "4. Return here for detailed analysis\n\n"
        "Your data stays 100% local on your machine."
    )
