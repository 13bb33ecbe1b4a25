import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

from .services.catalog import MAX_IMAGES
from .services.choices import MAX_CHOICES

# Load environment variables from a .env file if present
load_dotenv()

DEFAULT_IMAGE_DIR = "images"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_SESSION_COOKIE = "quiz_session"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Runtime configuration of the quiz service."""

    image_dir: str
    max_images: int
    max_choices: int
    host: str
    port: int
    session_cookie: str
    cors_allow_origins: List[str]
    log_level: str


# PUBLIC_INTERFACE
def load_settings() -> Settings:
    """
    Build settings from the environment.

    Recognized variables: IMAGE_QUIZ_IMAGE_DIR, IMAGE_QUIZ_MAX_IMAGES,
    IMAGE_QUIZ_MAX_CHOICES, IMAGE_QUIZ_HOST, IMAGE_QUIZ_PORT,
    IMAGE_QUIZ_SESSION_COOKIE, CORS_ALLOW_ORIGINS (comma separated) and LOG_LEVEL.

    Raises:
        ValueError: if a numeric variable is not an integer.
    """
    origins = os.getenv("CORS_ALLOW_ORIGINS")
    return Settings(
        image_dir=os.getenv("IMAGE_QUIZ_IMAGE_DIR") or DEFAULT_IMAGE_DIR,
        max_images=_env_int("IMAGE_QUIZ_MAX_IMAGES", MAX_IMAGES),
        max_choices=_env_int("IMAGE_QUIZ_MAX_CHOICES", MAX_CHOICES),
        host=os.getenv("IMAGE_QUIZ_HOST") or DEFAULT_HOST,
        port=_env_int("IMAGE_QUIZ_PORT", DEFAULT_PORT),
        session_cookie=os.getenv("IMAGE_QUIZ_SESSION_COOKIE") or DEFAULT_SESSION_COOKIE,
        cors_allow_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else ["*"],
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return load_settings()
