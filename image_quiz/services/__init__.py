"""
Quiz core: catalog loading, answer checking, choices, session state and results.
"""

from .catalog import IMAGE_EXTENSIONS, MAX_IMAGES, load_catalog  # noqa: F401
from .choices import MAX_CHOICES, build_choices  # noqa: F401
from .errors import DirectoryUnreadable, EmptyCatalog, InvalidState, NoActiveSession, QuizError  # noqa: F401
from .evaluator import canonical_answer, evaluate  # noqa: F401
from .results import QuizResult, summarize  # noqa: F401
from .session import AnswerOutcome, Mode, QuestionView, QuizSession, SessionStatus, WrongItem  # noqa: F401
