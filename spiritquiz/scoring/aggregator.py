from __future__ import annotations

"""Per-archetype point aggregation with completion damping."""

import math
from typing import Dict, Iterable, List, Mapping, Union

from ..results.schema import ArchetypeScore, Response
from .config import DAMPING_BASELINE
from .errors import ValidationError

ResponseLike = Union[Response, Mapping]


def round_half_up(x: float) -> int:
    """Round .5 away from zero for non-negative x (2.5 -> 3, unlike round())."""
    return int(math.floor(x + 0.5))


def _as_response(entry: ResponseLike) -> Response:
    return entry if isinstance(entry, Response) else Response.from_dict(entry)


def count_answered(responses: Iterable[ResponseLike]) -> int:
    return sum(1 for r in responses if _as_response(r).is_scored)


def damping_factor(answered: int) -> float:
    """Completion factor in [0, 1]; saturates at DAMPING_BASELINE answers."""
    return min(answered / DAMPING_BASELINE, 1.0)


def aggregate_scores(responses: List[ResponseLike]) -> List[ArchetypeScore]:
    """Sum points per archetype over scored responses and apply damping.

    Archetypes appear in first-seen order; ones never awarded points by any
    scored response are absent. Every record carries the same damping factor.
    """
    totals: Dict[str, float] = {}
    answered = 0
    for entry in responses:
        response = _as_response(entry)
        if not response.is_scored:
            continue
        answered += 1
        for archetype, points in response.points.items():
            if archetype not in totals:
                totals[archetype] = 0
            totals[archetype] += points

    factor = damping_factor(answered)
    return [
        ArchetypeScore(
            archetype=archetype,
            total_points=round_half_up(_damped(archetype, raw, factor)),
            confidence=factor,
        )
        for archetype, raw in totals.items()
    ]


def _damped(archetype: str, raw: float, factor: float) -> float:
    try:
        value = raw * factor
    except OverflowError:
        value = math.inf
    if not math.isfinite(value):
        raise ValidationError(
            f"Total points for archetype '{archetype}' are too large to score",
            field=f"points.{archetype}",
            expected="finite point total",
        )
    return value
