from __future__ import annotations

"""Ranking of aggregated archetype scores."""

from typing import List, Optional, Tuple

from ..results.schema import ArchetypeScore
from .errors import NoScoresError


def sort_scores(scores: List[ArchetypeScore]) -> List[ArchetypeScore]:
    # sorted() is stable: tied archetypes keep aggregation order.
    return sorted(scores, key=lambda s: s.total_points, reverse=True)


def rank_scores(scores: List[ArchetypeScore]) -> Tuple[ArchetypeScore, Optional[ArchetypeScore]]:
    """Return (primary, candidate secondary or None)."""
    if not scores:
        raise NoScoresError("No scores provided for result calculation")
    ranked = sort_scores(scores)
    secondary = ranked[1] if len(ranked) > 1 else None
    return ranked[0], secondary
