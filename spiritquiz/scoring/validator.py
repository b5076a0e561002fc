from __future__ import annotations

"""Structural checks on a response list before any aggregation happens."""

import math
from numbers import Real
from typing import Any, Mapping

from ..results.schema import OPTION_IDS, SENTINELS, Response
from .errors import ValidationError

VALID_OPTIONS = tuple(OPTION_IDS) + tuple(sorted(SENTINELS))


def _get(entry: Any, key: str, attr: str) -> Any:
    if isinstance(entry, Response):
        return getattr(entry, attr)
    if isinstance(entry, Mapping):
        return entry.get(key)
    return None


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large to convert to float
        return False


def validate_responses(responses: Any) -> None:
    """Fail fast with ValidationError on the first malformed entry.

    Entries may be Response objects or wire mappings with the keys
    questionId, selectedOption and points. The input is never modified.
    """
    if not isinstance(responses, list):
        raise ValidationError("Responses must be a list", field="responses", expected="list")
    if not responses:
        raise ValidationError("At least one response is required", field="responses", expected="non-empty list")

    for index, entry in enumerate(responses):
        if not isinstance(entry, (Response, Mapping)):
            raise ValidationError(
                f"Response {index}: must be a mapping",
                index=index,
                field="response",
                expected="mapping",
            )

        question_id = _get(entry, "questionId", "question_id")
        if not isinstance(question_id, str) or not question_id:
            raise ValidationError(
                f"Response {index}: questionId is required and must be a string",
                index=index,
                field="questionId",
                expected="non-empty string",
            )

        selected = _get(entry, "selectedOption", "selected_option")
        if not isinstance(selected, str) or not selected:
            raise ValidationError(
                f"Response {index}: selectedOption is required and must be a string",
                index=index,
                field="selectedOption",
                expected="non-empty string",
            )
        if selected not in VALID_OPTIONS:
            raise ValidationError(
                f"Response {index}: selectedOption must be one of: {', '.join(VALID_OPTIONS)}",
                index=index,
                field="selectedOption",
                expected=" | ".join(VALID_OPTIONS),
            )

        points = _get(entry, "points", "points")
        if not isinstance(points, Mapping):
            raise ValidationError(
                f"Response {index}: points is required and must be a mapping",
                index=index,
                field="points",
                expected="mapping of archetype -> number",
            )
        for archetype, value in points.items():
            if not isinstance(archetype, str):
                raise ValidationError(
                    f"Response {index}: archetype keys must be strings",
                    index=index,
                    field="points",
                    expected="string archetype id",
                )
            if not _is_number(value) or value < 0:
                raise ValidationError(
                    f"Response {index}: points for archetype '{archetype}' must be a non-negative number",
                    index=index,
                    field=f"points.{archetype}",
                    expected="non-negative number",
                )
