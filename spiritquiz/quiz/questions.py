from __future__ import annotations

"""Question bank models and loader.

The bank is a static JSON document:

{
  "questions": [
    {"id": "q1", "text": "...", "category": "social", "order": 1,
     "options": [{"id": "A", "text": "...", "points": {"wolf": 3, "dog": 1}}, ...]},
    ...
  ]
}
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..results.schema import OPTION_IDS

DEFAULT_BANK = Path(__file__).resolve().parent.parent / "resources" / "questions.json"


class AnswerOption(BaseModel):
    id: str
    text: str
    points: Dict[str, int] = Field(default_factory=dict)

    @field_validator("id")
    @classmethod
    def _letter(cls, v: str) -> str:
        if v not in OPTION_IDS:
            raise ValueError(f"option id must be one of {', '.join(OPTION_IDS)}")
        return v

    @field_validator("points")
    @classmethod
    def _non_negative(cls, v: Dict[str, int]) -> Dict[str, int]:
        for archetype, pts in v.items():
            if pts < 0:
                raise ValueError(f"points for '{archetype}' must be >= 0")
        return v


class Question(BaseModel):
    id: str = Field(min_length=1)
    text: str
    category: str
    order: int = Field(ge=1)
    options: List[AnswerOption] = Field(min_length=1, max_length=len(OPTION_IDS))

    @field_validator("options")
    @classmethod
    def _unique_ids(cls, v: List[AnswerOption]) -> List[AnswerOption]:
        ids = [o.id for o in v]
        if len(set(ids)) != len(ids):
            raise ValueError("option ids must be unique within a question")
        return v

    def option(self, option_id: str) -> Optional[AnswerOption]:
        return next((o for o in self.options if o.id == option_id), None)


def load_questions(path: Optional[str | Path] = None) -> List[Question]:
    """Load and validate a question bank, ordered by `order`.

    Args:
        path: JSON file to read. Defaults to the packaged 15-question bank.
    """
    p = Path(path) if path else DEFAULT_BANK
    with p.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    items = raw.get("questions", []) if isinstance(raw, dict) else raw
    questions = [Question.model_validate(q) for q in items]
    ids = [q.id for q in questions]
    if len(set(ids)) != len(ids):
        raise ValueError(f"duplicate question ids in {p}")
    return sorted(questions, key=lambda q: q.order)


def archetypes_in(questions: List[Question]) -> List[str]:
    """Every archetype id any option awards points to, in first-seen order."""
    seen: Dict[str, None] = {}
    for q in questions:
        for opt in q.options:
            for archetype in opt.points:
                seen.setdefault(archetype, None)
    return list(seen)
