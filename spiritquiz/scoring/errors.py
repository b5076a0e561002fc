from __future__ import annotations

"""Exceptions raised by the scoring engine."""

from typing import Optional


class ScoringError(Exception):
    """Base class for scoring failures. Both kinds mean the input is unusable."""


class ValidationError(ScoringError):
    """A response list is structurally malformed.

    `index` is the offending entry (None for list-level problems), `field` the
    offending key and `expected` a short description of the accepted shape.
    """

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        field: Optional[str] = None,
        expected: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.field = field
        self.expected = expected


class NoScoresError(ScoringError):
    """No archetype received any points."""
