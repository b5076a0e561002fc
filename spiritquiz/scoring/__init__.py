"""Scoring engine: turns quiz responses into a ranked spirit animal result."""

from .config import ScoringConfig, DEFAULT_CONFIG
from .errors import ScoringError, ValidationError, NoScoresError
from .validator import validate_responses
from .aggregator import aggregate_scores, count_answered, damping_factor, round_half_up
from .ranker import rank_scores, sort_scores
from .confidence import classify_confidence, score_difference
from .assembler import assemble_result, include_secondary
from .engine import (
    ScoringEngine,
    compute_result,
    get_archetype_score,
    completion_percentage,
    is_result_reliable,
)

__all__ = [
    "ScoringConfig",
    "DEFAULT_CONFIG",
    "ScoringError",
    "ValidationError",
    "NoScoresError",
    "validate_responses",
    "aggregate_scores",
    "count_answered",
    "damping_factor",
    "round_half_up",
    "rank_scores",
    "sort_scores",
    "classify_confidence",
    "score_difference",
    "assemble_result",
    "include_secondary",
    "ScoringEngine",
    "compute_result",
    "get_archetype_score",
    "completion_percentage",
    "is_result_reliable",
]
