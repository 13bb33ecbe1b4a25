"""
API package initialization.

Exports shared schema models for external use.
"""

# Re-export commonly used schema models
from .schemas import AdvanceOut, AnswerIn, AnswerOut, QuestionOut, ResultOut, StartIn, StatusOut, WrongItemOut  # noqa: F401
