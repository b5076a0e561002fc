from __future__ import annotations

"""Analytics configuration using Pydantic."""

from typing import List
from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Settings for batch reports over saved quiz sessions.

    - sessions_glob: pattern matched inside the sessions directory
    - top_n: archetypes kept in distribution charts (>0)
    - reliable_levels: confidence labels counted as reliable
    """

    sessions_glob: str = "*.json"
    top_n: int = Field(8, gt=0)
    reliable_levels: List[str] = Field(default_factory=lambda: ["high", "medium"])
