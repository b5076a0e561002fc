"""Spirit animal quiz package.

`compute_result` is the single entry point presentation layers need: hand it
the full response list at the end of a quiz and render the QuizResult.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .results.schema import ArchetypeScore, ConfidenceLevel, QuizResult, Response
from .scoring import (
    NoScoresError,
    ScoringConfig,
    ScoringEngine,
    ScoringError,
    ValidationError,
    compute_result,
)

__all__ = [
    "__version__",
    "ArchetypeScore",
    "ConfidenceLevel",
    "QuizResult",
    "Response",
    "NoScoresError",
    "ScoringConfig",
    "ScoringEngine",
    "ScoringError",
    "ValidationError",
    "compute_result",
]
