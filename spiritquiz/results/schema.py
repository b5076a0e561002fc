from __future__ import annotations

"""Result schema dataclasses shared by the quiz session and the scoring engine."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

SKIP = "skip"
UNKNOWN = "unknown"
SENTINELS = frozenset({SKIP, UNKNOWN})
OPTION_IDS = ("A", "B", "C", "D", "E", "F")


class ConfidenceLevel:
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Response:
    """One answer to one question, or a skip/unknown sentinel.

    `timestamp` is epoch milliseconds and is never read by the scoring engine.
    """

    question_id: str
    selected_option: str
    points: Dict[str, float] = field(default_factory=dict)
    timestamp: Optional[int] = None

    @property
    def is_scored(self) -> bool:
        return self.selected_option not in SENTINELS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Response":
        return cls(
            question_id=data.get("questionId"),
            selected_option=data.get("selectedOption"),
            points=dict(data.get("points") or {}),
            timestamp=data.get("timestamp"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "questionId": self.question_id,
            "selectedOption": self.selected_option,
            "points": dict(self.points),
        }
        if self.timestamp is not None:
            out["timestamp"] = self.timestamp
        return out


@dataclass(frozen=True)
class ArchetypeScore:
    archetype: str
    total_points: int
    confidence: float
    # Reserved for per-category detail; never populated by the aggregator.
    category_breakdown: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "archetype": self.archetype,
            "totalPoints": self.total_points,
            "confidence": self.confidence,
            "categoryBreakdown": dict(self.category_breakdown),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ArchetypeScore":
        return cls(
            archetype=str(data["archetype"]),
            total_points=int(data["totalPoints"]),
            confidence=float(data["confidence"]),
            category_breakdown=dict(data.get("categoryBreakdown") or {}),
        )


@dataclass(frozen=True)
class QuizResult:
    primary: ArchetypeScore
    secondary: Optional[ArchetypeScore]
    confidence: str
    total_questions_answered: int
    skipped_questions: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary": self.primary.to_dict(),
            "secondary": self.secondary.to_dict() if self.secondary else None,
            "confidence": self.confidence,
            "totalQuestionsAnswered": self.total_questions_answered,
            "skippedQuestions": self.skipped_questions,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QuizResult":
        secondary = data.get("secondary")
        return cls(
            primary=ArchetypeScore.from_dict(data["primary"]),
            secondary=ArchetypeScore.from_dict(secondary) if secondary else None,
            confidence=str(data["confidence"]),
            total_questions_answered=int(data["totalQuestionsAnswered"]),
            skipped_questions=int(data["skippedQuestions"]),
        )
