from __future__ import annotations

"""Confidence label from completion (damping) and score separation."""

from typing import Optional

from ..results.schema import ArchetypeScore, ConfidenceLevel
from .config import HIGH_SCORE_GAP, MEDIUM_SCORE_GAP, ScoringConfig


def score_difference(primary: ArchetypeScore, secondary: Optional[ArchetypeScore]) -> int:
    return primary.total_points - (secondary.total_points if secondary is not None else 0)


def classify_confidence(
    primary: ArchetypeScore,
    secondary: Optional[ArchetypeScore],
    config: ScoringConfig,
) -> str:
    """Return "high", "medium" or "low"; first matching rule wins.

    - high: damping >= high threshold and gap >= 20
    - medium: damping >= medium threshold and gap >= 10
    - low: anything else
    """
    gap = score_difference(primary, secondary)
    damping = primary.confidence
    if damping >= config.high_confidence_threshold and gap >= HIGH_SCORE_GAP:
        return ConfidenceLevel.HIGH
    if damping >= config.medium_confidence_threshold and gap >= MEDIUM_SCORE_GAP:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW
