from __future__ import annotations

"""Scoring engine facade.

Pipeline: validate -> aggregate -> rank -> classify confidence -> assemble.
Each call is a pure function of the response list and an immutable
ScoringConfig; nothing is kept between calls.
"""

from typing import Any, Iterable, List, Optional

from ..app.explain import trace as xtrace
from ..results.schema import ArchetypeScore, ConfidenceLevel, QuizResult
from .aggregator import ResponseLike, aggregate_scores, count_answered, round_half_up
from .assembler import assemble_result
from .config import ASSUMED_TOTAL_QUESTIONS, DEFAULT_CONFIG, ScoringConfig
from .confidence import classify_confidence
from .ranker import rank_scores, sort_scores
from .validator import validate_responses


class ScoringEngine:
    """Immutable engine bound to one ScoringConfig.

    Use `with_config(...)` to derive an engine with other thresholds; the
    original engine is left untouched.
    """

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self._config = config if config is not None else DEFAULT_CONFIG

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def with_config(self, **overrides: Any) -> "ScoringEngine":
        merged = {**self._config.model_dump(), **overrides}
        return ScoringEngine(ScoringConfig(**merged))

    def ranked_scores(self, responses: List[ResponseLike]) -> List[ArchetypeScore]:
        """Validate and aggregate, returning every archetype highest first."""
        validate_responses(responses)
        return sort_scores(aggregate_scores(responses))

    def score(self, responses: List[ResponseLike]) -> QuizResult:
        validate_responses(responses)
        xtrace("validated", {"responses": len(responses)})

        scores = aggregate_scores(responses)
        xtrace(
            "aggregated",
            {
                "answered": count_answered(responses),
                "damping": scores[0].confidence if scores else None,
                "totals": {s.archetype: s.total_points for s in scores},
            },
        )

        primary, candidate = rank_scores(scores)
        confidence = classify_confidence(primary, candidate, self._config)
        xtrace(
            "classified",
            {
                "primary": primary.archetype,
                "candidate_secondary": candidate.archetype if candidate else None,
                "confidence": confidence,
            },
        )

        result = assemble_result(primary, candidate, confidence, self._config)
        xtrace("assembled", {"secondary": result.secondary.archetype if result.secondary else None})
        return result


def compute_result(responses: List[ResponseLike], config: Optional[ScoringConfig] = None) -> QuizResult:
    """Score a complete response list. Raises ValidationError or NoScoresError."""
    return ScoringEngine(config).score(responses)


def get_archetype_score(scores: Iterable[ArchetypeScore], name: str) -> Optional[ArchetypeScore]:
    """Case-insensitive lookup of one archetype in a score list."""
    wanted = name.lower()
    return next((s for s in scores if s.archetype.lower() == wanted), None)


def completion_percentage(responses: Iterable[ResponseLike], total_questions: int = ASSUMED_TOTAL_QUESTIONS) -> int:
    """Percentage (0-100, rounded) of total_questions that were actually answered."""
    if total_questions <= 0:
        raise ValueError("total_questions must be positive")
    return round_half_up(count_answered(responses) / total_questions * 100)


def is_result_reliable(result: QuizResult) -> bool:
    return result.confidence in (ConfidenceLevel.MEDIUM, ConfidenceLevel.HIGH)
