import logging
import mimetypes
import os
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from ..config import get_settings
from ..services.catalog import IMAGE_EXTENSIONS
from ..services.errors import DirectoryUnreadable, EmptyCatalog, InvalidState, NoActiveSession, QuizError
from ..services.results import QuizResult
from ..services.session import Mode, QuestionView
from ..storage.session_store import SessionStore
from .schemas import (
    AdvanceOut,
    AnswerIn,
    AnswerOut,
    QuestionOut,
    ResultOut,
    StartIn,
    StatusOut,
    WrongItemOut,
)

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "System", "description": "System and service endpoints"},
    {"name": "Quiz", "description": "Quiz session endpoints"},
    {"name": "Images", "description": "Quiz image files"},
]

app = FastAPI(
    title="Image Quiz Backend",
    description="Backend service that quizzes users on the names of images in a folder.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Status codes per error kind; catalog problems are server-side faults.
_ERROR_STATUS = {
    DirectoryUnreadable: status.HTTP_500_INTERNAL_SERVER_ERROR,
    EmptyCatalog: status.HTTP_500_INTERNAL_SERVER_ERROR,
    NoActiveSession: status.HTTP_404_NOT_FOUND,
    InvalidState: status.HTTP_409_CONFLICT,
}


# PUBLIC_INTERFACE
def get_store() -> SessionStore:
    """Return a cached singleton instance of the session store."""
    return _get_store_singleton()


@lru_cache(maxsize=1)
def _get_store_singleton() -> SessionStore:
    """Internal cached constructor for the store, configured from settings."""
    settings = get_settings()
    return SessionStore(
        image_dir=settings.image_dir,
        max_images=settings.max_images,
        max_choices=settings.max_choices,
    )


def _http_error(exc: QuizError) -> HTTPException:
    code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.warning("%s: %s", type(exc).__name__, exc)
    return HTTPException(status_code=code, detail=str(exc))


def _session_id(request: Request) -> Optional[str]:
    return request.cookies.get(get_settings().session_cookie)


def _set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(get_settings().session_cookie, session_id, httponly=True, samesite="lax")


def _question_out(view: QuestionView) -> QuestionOut:
    return QuestionOut(
        image_id=view.image_id,
        image_url=f"/images/{view.image_id}",
        position=view.position,
        number=view.number,
        total=view.total,
        score=view.score,
        wrong_count=view.wrong_count,
        progress_percent=view.progress_percent,
        choices=list(view.choices) if view.choices is not None else None,
    )


def _result_out(result: QuizResult) -> ResultOut:
    return ResultOut(
        score=result.score,
        total=result.total,
        rate_percent=result.rate,
        wrong_items=[
            WrongItemOut(image_id=item.image_id, answer=item.answer, user_input=item.user_input)
            for item in result.wrong_items
        ],
    )


@app.get("/health", summary="Health Check", tags=["System"])
def health_check(store: SessionStore = Depends(get_store)):
    """
    Health check endpoint.

    Returns:
        JSON payload with a simple 'Healthy' message and the image directory.
    """
    return {"message": "Healthy", "image_dir": store.image_dir}


@app.post(
    "/session",
    response_model=QuestionOut,
    status_code=status.HTTP_201_CREATED,
    summary="Start a quiz session",
    description="Loads a freshly shuffled catalog, starts a session in the given mode and returns the first question.",
    tags=["Quiz"],
)
def start_session(
    request: Request,
    response: Response,
    start_in: Optional[StartIn] = None,
    store: SessionStore = Depends(get_store),
) -> QuestionOut:
    """
    Start (or replace) the caller's session.

    Notes:
        - The mode defaults to 'subject' when no body is sent.
        - The session id is stored in a cookie; an existing cookie is reused so
          the old session is replaced rather than left behind.
    """
    mode = start_in.mode if start_in is not None else Mode.SUBJECT
    try:
        session_id, view = store.start_session(mode, _session_id(request))
    except QuizError as exc:
        raise _http_error(exc) from exc
    _set_session_cookie(response, session_id)
    return _question_out(view)


@app.get(
    "/question",
    response_model=QuestionOut,
    summary="Current question",
    description="Returns the image at the current position, with options in multiple mode.",
    tags=["Quiz"],
)
def current_question(request: Request, store: SessionStore = Depends(get_store)) -> QuestionOut:
    try:
        return _question_out(store.current_question(_session_id(request)))
    except QuizError as exc:
        raise _http_error(exc) from exc


@app.post(
    "/answer",
    response_model=AnswerOut,
    summary="Submit an answer",
    description="Judges the answer for the current image. Each image accepts exactly one answer.",
    tags=["Quiz"],
)
def submit_answer(answer_in: AnswerIn, request: Request, store: SessionStore = Depends(get_store)) -> AnswerOut:
    try:
        outcome = store.submit_answer(_session_id(request), answer_in.answer)
    except QuizError as exc:
        raise _http_error(exc) from exc
    return AnswerOut(is_correct=outcome.is_correct, answer=outcome.answer)


@app.post(
    "/next",
    response_model=AdvanceOut,
    summary="Go to the next question",
    description="Moves past the answered image. Returns the next question, or the result when the quiz is over.",
    tags=["Quiz"],
)
def advance(request: Request, store: SessionStore = Depends(get_store)) -> AdvanceOut:
    try:
        outcome = store.advance(_session_id(request))
    except QuizError as exc:
        raise _http_error(exc) from exc
    if isinstance(outcome, QuizResult):
        return AdvanceOut(done=True, result=_result_out(outcome))
    return AdvanceOut(done=False, question=_question_out(outcome))


@app.post(
    "/restart",
    response_model=QuestionOut,
    summary="Restart the quiz",
    description="Reshuffles the images and starts over in the same mode.",
    tags=["Quiz"],
)
def restart_session(request: Request, response: Response, store: SessionStore = Depends(get_store)) -> QuestionOut:
    session_id = _session_id(request)
    try:
        view = store.restart_session(session_id)
    except QuizError as exc:
        raise _http_error(exc) from exc
    _set_session_cookie(response, session_id)
    return _question_out(view)


@app.get(
    "/result",
    response_model=ResultOut,
    summary="Quiz result",
    description="Returns the score, rate and the review of missed images.",
    tags=["Quiz"],
)
def get_result(request: Request, store: SessionStore = Depends(get_store)) -> ResultOut:
    try:
        return _result_out(store.get_result(_session_id(request)))
    except QuizError as exc:
        raise _http_error(exc) from exc


@app.get(
    "/status",
    response_model=StatusOut,
    summary="Session status",
    description="Returns the session counters without changing anything.",
    tags=["System"],
)
def get_status(request: Request, store: SessionStore = Depends(get_store)) -> StatusOut:
    try:
        current = store.get_status(_session_id(request))
    except QuizError as exc:
        raise _http_error(exc) from exc
    return StatusOut(
        position=current.position,
        total=current.total,
        score=current.score,
        wrong_count=current.wrong_count,
    )


@app.get("/images/{name}", summary="Image file", tags=["Images"])
def get_image(name: str, store: SessionStore = Depends(get_store)) -> FileResponse:
    """
    Serve one image from the image directory.

    Raises:
        HTTPException 404 if the name is not a plain image filename in the directory.
    """
    if os.path.basename(name) != name or os.path.splitext(name)[1].lower() not in IMAGE_EXTENSIONS:
        raise HTTPException(status_code=404, detail="Image not found")
    path = os.path.join(store.image_dir, name)
    if not os.path.isfile(path):
        raise HTTPException(status_code=404, detail="Image not found")
    media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    return FileResponse(path, media_type=media_type)
