"""
Domain exceptions.

Every failure surfaced to callers is a DomainError carrying a stable
``kind`` string and a human readable message. The HTTP layer maps kinds
to status codes; nothing here is retried or treated as fatal.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    Attributes:
        kind: Stable error identifier (e.g. "transport", "parse")
        message: Explanation suitable for display
    """

    kind = "domain"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        """Serialize as ``{"error": kind, "message": message}``."""
        return {"error": self.kind, "message": self.message}


# ═══════════════════════════════════════════════════════════
# CONFIGURATION
# ═══════════════════════════════════════════════════════════


class ConfigurationError(DomainError):
    """
    Required configuration is missing or invalid.

    Raised when:
    - OPENAI_API_KEY is not set
    - MONGODB_URI is missing with USER_REPOSITORY=mongodb
    - A numeric setting cannot be parsed

    Example:
        >>> raise ConfigurationError("OPENAI_API_KEY not found in environment")
    """

    kind = "configuration"


# ═══════════════════════════════════════════════════════════
# ANALYSIS PIPELINE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class TransportError(DomainError):
    """
    The generative model call failed.

    Raised when:
    - Network error or timeout after the retry budget
    - Provider rejected the request (auth, quota, bad request)
    - Provider returned zero candidates

    Example:
        >>> raise TransportError("Model returned no candidates")
    """

    kind = "transport"


class ExtractionError(DomainError):
    """
    No JSON object could be located in the model reply.

    Example:
        >>> raise ExtractionError("No JSON object found in model response")
    """

    kind = "extraction"


class ParseError(DomainError):
    """
    A JSON object was located but is not valid JSON.

    Example:
        >>> raise ParseError("Expecting property name enclosed in double quotes")
    """

    kind = "parse"


# ═══════════════════════════════════════════════════════════
# PERSISTENCE / INPUT EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class NotFoundError(DomainError):
    """
    Resource not found.

    Generic not found error. Prefer specific types like UserNotFoundError.
    """

    kind = "not_found"


class ConflictError(DomainError):
    """Resource already exists or is in a conflicting state."""

    kind = "conflict"


class ValidationError(DomainError):
    """
    Input validation failed.

    Raised when:
    - Empty description or empty image upload
    - Health metrics out of range

    Example:
        >>> raise ValidationError("height_inches must be between 0 and 11")
    """

    kind = "validation"
