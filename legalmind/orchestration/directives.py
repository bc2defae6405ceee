"""Free-text directive classification for incoming chat messages."""

from enum import Enum

COMMIT_PHRASES = ("save that", "remember this")


class Directive(str, Enum):
    """Closed set of outcomes for a user message."""

    commit = "commit"  # save the last assistant answer as an insight
    normal = "normal"


def classify_directive(message: str) -> Directive:
    """Classify a message by case-insensitive phrase containment."""
    lowered = message.lower()
    if any(phrase in lowered for phrase in COMMIT_PHRASES):
        return Directive.commit
    return Directive.normal
