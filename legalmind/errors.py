"""Exception types shared across the memory engine."""


class MalformedInputError(Exception):
    """Request is missing required fields or carries invalid values."""

    pass


class GenerationUnavailableError(Exception):
    """No generation backend is configured (missing credential)."""

    pass


class GenerationFailedError(Exception):
    """Generation backend call failed, timed out or returned nothing usable."""

    pass
