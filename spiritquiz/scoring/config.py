from __future__ import annotations

"""Scoring configuration (thresholds) using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Answered questions needed for an undamped score.
DAMPING_BASELINE = 10
HIGH_SCORE_GAP = 20
MEDIUM_SCORE_GAP = 10
# Quiz length assumed when deriving answered/skipped counts.
ASSUMED_TOTAL_QUESTIONS = 15


class ScoringConfig(BaseModel):
    """Immutable thresholds for one scoring computation.

    - secondary_threshold: fraction of the primary total the runner-up needs
    - high_confidence_threshold: damping factor required for "high"
    - medium_confidence_threshold: damping factor required for "medium"
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    secondary_threshold: float = Field(0.70, ge=0, le=1)
    high_confidence_threshold: float = Field(1.0, ge=0, le=1)
    medium_confidence_threshold: float = Field(0.6, ge=0, le=1)

    @field_validator("medium_confidence_threshold")
    @classmethod
    def _medium_le_high(cls, v: float, info: ValidationInfo) -> float:
        high = info.data.get("high_confidence_threshold")
        if high is not None and v > high:
            raise ValueError("medium_confidence_threshold must be <= high_confidence_threshold")
        return v


DEFAULT_CONFIG = ScoringConfig()
