"""
Failure classification for deckwright.

Every failure a caller can see is classified with a FailureKind. Two shapes
exist:

- KnownError: an exception for fatal, explainable problems (unknown format,
  catastrophic deck text). Raised, never swallowed.
- FailureDetail: a plain result describing a non-fatal outcome (a deck that
  fails its format rules). Returned, never raised.

Pure computations over domain input never raise. Only invalid configuration
and unreadable input are fatal.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input failures
    INVALID_INPUT = "invalid_input"
    MALFORMED_DECK_TEXT = "malformed_deck_text"

    # Configuration failures
    UNKNOWN_FORMAT = "unknown_format"

    # Resource failures
    CARD_NOT_FOUND = "card_not_found"

    # Constraint violations
    VALIDATION_FAILED = "validation_failed"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )
    reasons: list[str] = Field(
        default_factory=list,
        description="Individual actionable reasons, in check order",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the library knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail for presentation layers."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class UnknownFormatError(KnownError):
    """
    Raised when a format name is not in the format rule table.

    This is fatal to the caller. There is no implicit fallback format.
    """

    def __init__(self, format_name: str, known_formats: list[str]):
        self.format_name = format_name
        self.known_formats = known_formats
        super().__init__(
            kind=FailureKind.UNKNOWN_FORMAT,
            message=f"Unknown format '{format_name}'.",
            detail=f"Known formats: {', '.join(known_formats)}",
            suggestion="Pick one of the supported formats.",
        )


class MalformedDeckTextError(KnownError):
    """
    Raised when deck text cannot be read as text at all.

    Individual unparseable lines never raise; they are skipped.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            kind=FailureKind.MALFORMED_DECK_TEXT,
            message="The decklist could not be read as text.",
            detail=reason,
            suggestion="Paste the decklist as plain text, one card per line.",
        )
