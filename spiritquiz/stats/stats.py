from __future__ import annotations

"""Session snapshot (JSON) and result summary formatting."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..quiz.archetypes import Archetype, lookup
from ..results.schema import SKIP, ArchetypeScore, ConfidenceLevel, QuizResult, Response

SNAPSHOT_SCHEMA = 1

CONFIDENCE_DESCRIPTIONS = {
    ConfidenceLevel.HIGH: "Your result is very reliable! You answered most questions and there was a clear winner.",
    ConfidenceLevel.MEDIUM: "Your result is quite reliable. Consider answering more questions for higher accuracy.",
    ConfidenceLevel.LOW: "Your result has lower confidence. Consider retaking the quiz and answering more questions.",
}


def write_session(path: str | Path, responses: List[Response], result: QuizResult) -> None:
    """Write the responses and the result of one quiz run as JSON to path."""
    data = {
        "schema": SNAPSHOT_SCHEMA,
        "responses": [r.to_dict() for r in responses],
        "result": result.to_dict(),
    }
    p = Path(path)
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def read_session(path: str | Path) -> Tuple[List[Response], QuizResult]:
    """Read a snapshot written by write_session.

    Raises ValueError when the file is not a snapshot of the current schema.
    """
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or int(data.get("schema", 0)) != SNAPSHOT_SCHEMA:
        raise ValueError(f"{p} is not a quiz session snapshot")
    responses = [Response.from_dict(r) for r in data.get("responses", [])]
    return responses, QuizResult.from_dict(data["result"])


def load_responses(path: str | Path) -> List[Any]:
    """Read a raw response list, either bare or inside a session snapshot.

    Entries are returned as parsed so the scoring validator sees them unchanged.
    """
    with Path(path).open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "responses" in data:
        return data["responses"]
    return data


def describe_confidence(label: str) -> str:
    return CONFIDENCE_DESCRIPTIONS.get(label, "Confidence level could not be determined.")


def _label(score: ArchetypeScore, archetypes: Optional[Dict[str, Archetype]]) -> Tuple[str, Optional[Archetype]]:
    animal = lookup(archetypes, score.archetype) if archetypes else None
    name = animal.name if animal is not None else score.archetype
    return f"{name} ({score.total_points} pts)", animal


def format_summary(result: QuizResult, archetypes: Optional[Dict[str, Archetype]] = None) -> str:
    """Return a human-readable summary of a quiz result.

    With `archetypes` (see load_archetypes) the primary and secondary are shown
    by display name, and the primary also gets its traits and description.
    Ids missing from the dataset are printed as-is.
    """
    text, animal = _label(result.primary, archetypes)
    lines = [f"Your spirit animal: {text}"]
    if animal is not None:
        if animal.primary_traits:
            lines.append(f"Traits: {', '.join(animal.primary_traits)}")
        if animal.description:
            lines.append(animal.description)
    if result.secondary is not None:
        text, _ = _label(result.secondary, archetypes)
        lines.append(f"Secondary: {text}")
    lines.append(f"Confidence: {result.confidence} - {describe_confidence(result.confidence)}")
    lines.append(f"Answered: {result.total_questions_answered} | Skipped: {result.skipped_questions}")
    return "\n".join(lines)


def counts(responses: List[Response]) -> Dict[str, int]:
    """Actual answered/skipped/unknown counts taken from the responses."""
    out = {"answered": 0, "skipped": 0, "unknown": 0}
    for r in responses:
        if r.is_scored:
            out["answered"] += 1
        elif r.selected_option == SKIP:
            out["skipped"] += 1
        else:
            out["unknown"] += 1
    return out
