"""In-memory session storage."""

from .session_store import SessionStore  # noqa: F401
