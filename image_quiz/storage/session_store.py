import logging
import random
import threading
import uuid
from typing import Optional, Tuple, Union

from ..services.catalog import MAX_IMAGES, load_catalog
from ..services.choices import MAX_CHOICES
from ..services.errors import NoActiveSession
from ..services.results import QuizResult, summarize
from ..services.session import AnswerOutcome, Mode, QuestionView, QuizSession, SessionStatus

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory home of the single live quiz session.

    The session is addressed by an opaque id handed out on start. Starting
    again replaces the live session whatever id it had; an id that does not
    name the live session is treated as no session at all.

    Every operation, reads included, runs under one lock so callers never see
    a half-applied transition. The session lives only as long as the process,
    and the session object never leaves the store; callers get frozen views.
    """

    # PUBLIC_INTERFACE
    def __init__(
        self,
        image_dir: str,
        max_images: int = MAX_IMAGES,
        max_choices: int = MAX_CHOICES,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            image_dir: Directory the catalog is loaded from on every start/restart.
            max_images: Catalog cap.
            max_choices: Option cap for multiple-choice questions.
            rng: Randomness source shared by all sessions. When omitted, each
                start/restart gets a freshly seeded ``random.Random``.
        """
        self.image_dir = image_dir
        self.max_images = max_images
        self.max_choices = max_choices
        self._rng = rng
        self._lock = threading.Lock()
        self._session_id: Optional[str] = None
        self._session: Optional[QuizSession] = None

    def _new_session(self, mode: Mode) -> QuizSession:
        rng = self._rng if self._rng is not None else random.Random()
        catalog = load_catalog(self.image_dir, rng=rng, limit=self.max_images)
        # QuizSession.start rejects an empty catalog.
        return QuizSession.start(catalog, mode, rng=rng, max_choices=self.max_choices)

    def _get(self, session_id: Optional[str]) -> QuizSession:
        if self._session is None or not session_id or session_id != self._session_id:
            raise NoActiveSession()
        return self._session

    # PUBLIC_INTERFACE
    def start_session(self, mode: Mode, session_id: Optional[str] = None) -> Tuple[str, QuestionView]:
        """
        Start a new session, replacing the live one.

        Args:
            mode: Question mode for the whole session.
            session_id: Id to reuse; a new id is generated when omitted.

        Returns:
            tuple: The session id and the first question.

        Raises:
            DirectoryUnreadable: if the image directory cannot be listed.
            EmptyCatalog: if the directory holds no images.
        """
        with self._lock:
            session = self._new_session(Mode(mode))
            if self._session_id is not None and self._session_id != session_id:
                logger.info("Session %s replaced by a new start", self._session_id)
            self._session_id = session_id or uuid.uuid4().hex
            self._session = session
            return self._session_id, session.question()

    # PUBLIC_INTERFACE
    def restart_session(self, session_id: Optional[str]) -> QuestionView:
        """
        Replace the live session with a freshly shuffled one in the same mode.

        The previous session stays in place when loading the new catalog fails.

        Raises:
            NoActiveSession: if ``session_id`` does not name the live session.
            DirectoryUnreadable: if the image directory cannot be listed.
            EmptyCatalog: if the directory holds no images.
        """
        with self._lock:
            previous = self._get(session_id)
            self._session = self._new_session(previous.mode)
            logger.info("Restarted session %s", session_id)
            return self._session.question()

    # PUBLIC_INTERFACE
    def current_question(self, session_id: Optional[str]) -> QuestionView:
        """Return the question at the session's current position."""
        with self._lock:
            return self._get(session_id).question()

    # PUBLIC_INTERFACE
    def submit_answer(self, session_id: Optional[str], user_input: str) -> AnswerOutcome:
        """Judge an answer for the current question of a session."""
        with self._lock:
            return self._get(session_id).answer(user_input)

    # PUBLIC_INTERFACE
    def advance(self, session_id: Optional[str]) -> Union[QuestionView, QuizResult]:
        """
        Move a session to its next question.

        Returns:
            QuestionView | QuizResult: The next question, or the final result
            once every image has been answered.
        """
        with self._lock:
            session = self._get(session_id)
            if session.advance():
                return summarize(session)
            return session.question()

    # PUBLIC_INTERFACE
    def get_result(self, session_id: Optional[str]) -> QuizResult:
        """Return the score summary of a session, finished or not."""
        with self._lock:
            return summarize(self._get(session_id))

    # PUBLIC_INTERFACE
    def get_status(self, session_id: Optional[str]) -> SessionStatus:
        """Return a session's counters."""
        with self._lock:
            return self._get(session_id).status()
