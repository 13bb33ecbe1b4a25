from typing import List, Optional

from pydantic import BaseModel, Field

from ..services.session import Mode


# PUBLIC_INTERFACE
class StartIn(BaseModel):
    """Input model for starting a quiz session."""
    mode: Mode = Field(default=Mode.SUBJECT, description="'subject' for free-text answers, 'multiple' for choices.")


# PUBLIC_INTERFACE
class AnswerIn(BaseModel):
    """Input model for submitting an answer."""
    answer: str = Field(default="", description="Raw answer text as typed or chosen by the user.")


# PUBLIC_INTERFACE
class QuestionOut(BaseModel):
    """The question at the current position of a session."""
    image_id: str = Field(..., description="Image filename, served under /images/.")
    image_url: str = Field(..., description="URL path of the image.")
    position: int = Field(..., description="0-based position of this question in the catalog.")
    number: int = Field(..., description="1-based question number for display.")
    total: int = Field(..., description="Number of images in the session.")
    score: int = Field(..., description="Correct answers so far.")
    wrong_count: int = Field(..., description="Wrong answers so far.")
    progress_percent: float = Field(..., description="Share of the catalog already consumed, 0-100.")
    choices: Optional[List[str]] = Field(default=None, description="Answer options; present only in multiple mode.")


# PUBLIC_INTERFACE
class AnswerOut(BaseModel):
    """Outcome of one submitted answer."""
    is_correct: bool = Field(..., description="Whether the answer matched.")
    answer: str = Field(..., description="The correct answer for the image.")


# PUBLIC_INTERFACE
class WrongItemOut(BaseModel):
    """One missed image in the result review."""
    image_id: str = Field(..., description="Image filename.")
    answer: str = Field(..., description="The correct answer.")
    user_input: str = Field(..., description="What the user submitted.")


# PUBLIC_INTERFACE
class ResultOut(BaseModel):
    """Final score of a session."""
    score: int = Field(..., description="Correct answers.")
    total: int = Field(..., description="Number of images in the session.")
    rate_percent: int = Field(..., description="Score as a whole percentage, rounded down.")
    wrong_items: List[WrongItemOut] = Field(..., description="Missed images in the order they were answered.")


# PUBLIC_INTERFACE
class AdvanceOut(BaseModel):
    """Either the next question or, once finished, the result."""
    done: bool = Field(..., description="True when the session has no more questions.")
    question: Optional[QuestionOut] = Field(default=None, description="Next question while not done.")
    result: Optional[ResultOut] = Field(default=None, description="Final result once done.")


# PUBLIC_INTERFACE
class StatusOut(BaseModel):
    """Session counters for diagnostics."""
    position: int = Field(..., description="0-based current position.")
    total: int = Field(..., description="Number of images in the session.")
    score: int = Field(..., description="Correct answers so far.")
    wrong_count: int = Field(..., description="Wrong answers so far.")
