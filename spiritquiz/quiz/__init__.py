from .archetypes import Archetype, load_archetypes, lookup
from .questions import AnswerOption, Question, archetypes_in, load_questions
from .session import QuizSession

__all__ = [
    "AnswerOption",
    "Archetype",
    "Question",
    "QuizSession",
    "archetypes_in",
    "load_archetypes",
    "load_questions",
    "lookup",
]
