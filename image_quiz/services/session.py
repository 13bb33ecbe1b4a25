"""
Quiz session state machine.

A session walks through its catalog one image at a time. Each position is
answered exactly once, then advanced past; once every position has been
consumed the session is done and only its result can be read.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .choices import MAX_CHOICES, build_choices
from .errors import EmptyCatalog, InvalidState
from .evaluator import canonical_answer, evaluate

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """How questions are presented."""

    SUBJECT = "subject"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class WrongItem:
    """One incorrect answer, recorded once and never changed."""

    image_id: str
    answer: str
    user_input: str


@dataclass(frozen=True)
class AnswerOutcome:
    """Result of judging one submission."""

    is_correct: bool
    answer: str


@dataclass(frozen=True)
class QuestionView:
    """Read-only snapshot of the question at the current position."""

    image_id: str
    position: int
    number: int
    total: int
    score: int
    wrong_count: int
    progress_percent: float
    choices: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class SessionStatus:
    """Counters of a session, for diagnostics."""

    position: int
    total: int
    score: int
    wrong_count: int


@dataclass
class QuizSession:
    """Mutable state of one quiz run."""

    catalog: List[str]
    mode: Mode = Mode.SUBJECT
    current: int = 0
    score: int = 0
    wrong: List[WrongItem] = field(default_factory=list)
    answered: bool = False
    done: bool = False
    choices: Optional[List[str]] = None
    max_choices: int = MAX_CHOICES
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    # PUBLIC_INTERFACE
    @classmethod
    def start(
        cls,
        catalog: List[str],
        mode: Mode,
        rng: Optional[random.Random] = None,
        max_choices: int = MAX_CHOICES,
    ) -> "QuizSession":
        """
        Create a fresh session positioned on the first image.

        Raises:
            EmptyCatalog: if the catalog has no images.
        """
        if not catalog:
            raise EmptyCatalog()
        if rng is None:
            rng = random.Random()
        session = cls(catalog=list(catalog), mode=Mode(mode), max_choices=max_choices, rng=rng)
        session._prepare_question()
        logger.info("Started %s session with %d images", session.mode.value, session.total)
        return session

    @property
    def total(self) -> int:
        return len(self.catalog)

    def _prepare_question(self) -> None:
        if self.mode is Mode.MULTIPLE:
            self.choices = build_choices(self.catalog, self.current, self.rng, self.max_choices)
        else:
            self.choices = None

    def _require_in_progress(self) -> None:
        if self.done:
            raise InvalidState("Quiz is already finished")

    # PUBLIC_INTERFACE
    def question(self) -> QuestionView:
        """Return the question at the current position."""
        self._require_in_progress()
        return QuestionView(
            image_id=self.catalog[self.current],
            position=self.current,
            number=self.current + 1,
            total=self.total,
            score=self.score,
            wrong_count=len(self.wrong),
            progress_percent=self.current / self.total * 100,
            choices=tuple(self.choices) if self.choices is not None else None,
        )

    # PUBLIC_INTERFACE
    def answer(self, user_input: str) -> AnswerOutcome:
        """
        Judge the answer for the current image and record the outcome.

        The position is not advanced; call ``advance`` afterwards.

        Raises:
            InvalidState: if the session is done or this position was already answered.
        """
        self._require_in_progress()
        if self.answered:
            raise InvalidState("Current question has already been answered")

        image_id = self.catalog[self.current]
        expected = canonical_answer(image_id)
        user_input = user_input or ""
        is_correct = evaluate(image_id, user_input)
        if is_correct:
            self.score += 1
        else:
            self.wrong.append(WrongItem(image_id=image_id, answer=expected, user_input=user_input))
        self.answered = True
        logger.debug("Answer for %s: %r (%s)", image_id, user_input, "correct" if is_correct else "wrong")
        return AnswerOutcome(is_correct=is_correct, answer=expected)

    # PUBLIC_INTERFACE
    def advance(self) -> bool:
        """
        Move past the answered position.

        Returns:
            bool: True when the session is now done.

        Raises:
            InvalidState: if the session is done or the current position has no answer yet.
        """
        self._require_in_progress()
        if not self.answered:
            raise InvalidState("Current question has not been answered yet")

        self.current += 1
        self.answered = False
        if self.current >= self.total:
            self.done = True
            self.choices = None
            logger.info("Session finished: %d/%d correct", self.score, self.total)
        else:
            self._prepare_question()
        return self.done

    # PUBLIC_INTERFACE
    def status(self) -> SessionStatus:
        """Return the session counters without changing anything."""
        return SessionStatus(
            position=self.current,
            total=self.total,
            score=self.score,
            wrong_count=len(self.wrong),
        )
