from __future__ import annotations

"""In-memory quiz session.

Keeps one Response per question while the user moves through the bank and
hands the full list to the scoring engine at the end. Nothing is persisted.
"""

import time
from typing import Callable, Dict, List, Optional

from ..results.schema import SKIP, UNKNOWN, Response
from .questions import Question


def _now_ms() -> int:
    return int(time.time() * 1000)


class QuizSession:
    def __init__(self, questions: List[Question], clock: Callable[[], int] = _now_ms) -> None:
        if not questions:
            raise ValueError("a quiz session needs at least one question")
        self.questions = list(questions)
        self._by_id: Dict[str, Question] = {q.id: q for q in self.questions}
        self._responses: Dict[str, Response] = {}
        self._clock = clock
        self.index = 0

    # --- navigation ---

    @property
    def current(self) -> Question:
        return self.questions[self.index]

    @property
    def is_last(self) -> bool:
        return self.index == len(self.questions) - 1

    def advance(self) -> bool:
        """Move to the next question; False when already on the last one."""
        if self.is_last:
            return False
        self.index += 1
        return True

    def back(self) -> bool:
        if self.index == 0:
            return False
        self.index -= 1
        return True

    def restart(self) -> None:
        self._responses.clear()
        self.index = 0

    # --- recording ---

    def _question(self, question_id: str) -> Question:
        try:
            return self._by_id[question_id]
        except KeyError:
            raise KeyError(f"unknown question id: {question_id}") from None

    def _record(self, response: Response) -> Response:
        # Re-answering replaces the earlier response for that question.
        self._responses[response.question_id] = response
        return response

    def answer(self, question_id: str, option_id: str) -> Response:
        question = self._question(question_id)
        option = question.option(option_id)
        if option is None:
            raise KeyError(f"question {question_id} has no option {option_id}")
        return self._record(
            Response(
                question_id=question_id,
                selected_option=option.id,
                points=dict(option.points),
                timestamp=self._clock(),
            )
        )

    def skip(self, question_id: str) -> Response:
        self._question(question_id)
        return self._record(Response(question_id, SKIP, {}, self._clock()))

    def mark_unknown(self, question_id: str) -> Response:
        self._question(question_id)
        return self._record(Response(question_id, UNKNOWN, {}, self._clock()))

    def selection(self, question_id: str) -> Optional[str]:
        response = self._responses.get(question_id)
        return response.selected_option if response else None

    # --- derived state ---

    @property
    def responses(self) -> List[Response]:
        """Recorded responses in question order."""
        return [self._responses[q.id] for q in self.questions if q.id in self._responses]

    @property
    def answered_count(self) -> int:
        return sum(1 for r in self._responses.values() if r.is_scored)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self._responses.values() if r.selected_option == SKIP)

    @property
    def progress(self) -> float:
        """Fraction of questions with any recorded response."""
        return len(self._responses) / len(self.questions)

    @property
    def is_complete(self) -> bool:
        return len(self._responses) == len(self.questions)
