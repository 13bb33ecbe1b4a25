from dataclasses import dataclass
from typing import Tuple

from .session import QuizSession, WrongItem


@dataclass(frozen=True)
class QuizResult:
    """Final score of a session with the answers that were missed."""

    score: int
    total: int
    rate: int
    wrong_items: Tuple[WrongItem, ...]


# PUBLIC_INTERFACE
def summarize(session: QuizSession) -> QuizResult:
    """
    Compute the score summary of a session.

    ``rate`` is an integer percentage rounded down, and 0 for an empty catalog.
    Wrong items keep the order in which they were answered.
    """
    total = session.total
    rate = session.score * 100 // total if total > 0 else 0
    return QuizResult(
        score=session.score,
        total=total,
        rate=rate,
        wrong_items=tuple(session.wrong),
    )
