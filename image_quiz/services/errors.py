"""Exceptions raised by the quiz core and mapped to HTTP errors by the API layer."""


class QuizError(Exception):
    """Base class for every caller-visible quiz failure."""


class DirectoryUnreadable(QuizError):
    """The image directory could not be listed."""

    def __init__(self, directory: str) -> None:
        super().__init__(f"Image directory '{directory}' cannot be read")
        self.directory = directory


class EmptyCatalog(QuizError):
    """The image directory is readable but holds no quiz images."""

    def __init__(self) -> None:
        super().__init__("No quiz images found")


class NoActiveSession(QuizError):
    """An operation needing a session was called before any session was started."""

    def __init__(self) -> None:
        super().__init__("No active quiz session")


class InvalidState(QuizError):
    """The session is not in a state that accepts the requested operation."""
