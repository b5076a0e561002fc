from __future__ import annotations

"""Packaging of ranked scores into the final QuizResult."""

from typing import Optional

from ..results.schema import ArchetypeScore, QuizResult
from .aggregator import round_half_up
from .config import ASSUMED_TOTAL_QUESTIONS, ScoringConfig


def include_secondary(
    primary: ArchetypeScore,
    secondary: Optional[ArchetypeScore],
    config: ScoringConfig,
) -> bool:
    if secondary is None:
        return False
    return secondary.total_points >= primary.total_points * config.secondary_threshold


def assemble_result(
    primary: ArchetypeScore,
    secondary: Optional[ArchetypeScore],
    confidence: str,
    config: ScoringConfig,
) -> QuizResult:
    # Counts are derived from the damping factor against a fixed 15-question
    # quiz, not from the response list. See DESIGN.md.
    answered = round_half_up(primary.confidence * ASSUMED_TOTAL_QUESTIONS)
    return QuizResult(
        primary=primary,
        secondary=secondary if include_secondary(primary, secondary, config) else None,
        confidence=confidence,
        total_questions_answered=answered,
        skipped_questions=ASSUMED_TOTAL_QUESTIONS - answered,
    )
