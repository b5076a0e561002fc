from __future__ import annotations

"""Spirit animal metadata keyed by the archetype ids used in option points."""

import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ANIMALS = Path(__file__).resolve().parent.parent / "resources" / "animals.json"


class Archetype(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    scientific_name: Optional[str] = Field(default=None, alias="scientificName")
    primary_traits: List[str] = Field(default_factory=list, alias="primaryTraits")
    description: str = ""
    strengths: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    life_lesson: Optional[str] = Field(default=None, alias="lifeLesson")


def load_archetypes(path: Optional[str | Path] = None) -> Dict[str, Archetype]:
    """Load the archetype dataset as a mapping id -> Archetype.

    Args:
        path: JSON file to read. Defaults to the packaged animals.json.
    """
    p = Path(path) if path else DEFAULT_ANIMALS
    with p.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    items = raw.get("animals", []) if isinstance(raw, dict) else raw
    out: Dict[str, Archetype] = {}
    for item in items:
        animal = Archetype.model_validate(item)
        if animal.id in out:
            raise ValueError(f"duplicate archetype id '{animal.id}' in {p}")
        out[animal.id] = animal
    return out


def lookup(archetypes: Dict[str, Archetype], archetype_id: str) -> Optional[Archetype]:
    """Case-insensitive lookup; None for ids missing from the dataset."""
    found = archetypes.get(archetype_id)
    if found is not None:
        return found
    wanted = archetype_id.lower()
    return next((a for key, a in archetypes.items() if key.lower() == wanted), None)
