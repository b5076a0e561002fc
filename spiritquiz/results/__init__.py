from .schema import ArchetypeScore, ConfidenceLevel, QuizResult, Response, SKIP, UNKNOWN

__all__ = ["ArchetypeScore", "ConfidenceLevel", "QuizResult", "Response", "SKIP", "UNKNOWN"]
