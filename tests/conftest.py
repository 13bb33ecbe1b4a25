import random
from pathlib import Path
from typing import Callable, Iterator, List

import pytest
from fastapi.testclient import TestClient

from image_quiz.api.main import app, get_store
from image_quiz.storage.session_store import SessionStore


def _make_images(directory: Path, names: List[str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"\x89PNG fake")
    return directory


@pytest.fixture
def make_image_dir(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that fills a fresh directory with empty image files."""
    counter = iter(range(1000))

    def factory(*names: str) -> Path:
        return _make_images(tmp_path / f"images-{next(counter)}", list(names))

    return factory


@pytest.fixture
def image_dir(make_image_dir: Callable[..., Path]) -> Path:
    return make_image_dir("cat.jpg", "dog.png", "fox.gif", "owl.webp", "bee.jpeg")


@pytest.fixture
def store(image_dir: Path) -> SessionStore:
    return SessionStore(str(image_dir), rng=random.Random(1234))


@pytest.fixture
def client(store: SessionStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_store] = lambda: store
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
