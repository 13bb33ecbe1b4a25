import logging
import os
import random
from typing import List, Optional

from .errors import DirectoryUnreadable

logger = logging.getLogger(__name__)

# Extensions are compared lower-cased.
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})

MAX_IMAGES = 30


def _is_image(name: str) -> bool:
    """Return True when the filename carries an allowed image extension."""
    # A bare ".png" has no stem to answer with; splitext gives it no extension.
    return os.path.splitext(name)[1].lower() in IMAGE_EXTENSIONS


# PUBLIC_INTERFACE
def load_catalog(directory: str, rng: Optional[random.Random] = None, limit: int = MAX_IMAGES) -> List[str]:
    """
    Build a shuffled, capped list of image filenames from a directory.

    The listing is not recursive: sub-directories are skipped, and so is every
    file whose extension is not an image extension. The remaining names are
    shuffled, then cut down to ``limit`` entries.

    Args:
        directory: Path of the directory to list.
        rng: Randomness source used for the shuffle. When omitted, a freshly
            seeded ``random.Random`` is created, so every call yields a new order.
        limit: Maximum number of filenames returned.

    Returns:
        list[str]: Filenames (not paths), possibly empty.

    Raises:
        DirectoryUnreadable: if the directory is missing or cannot be listed.
    """
    if rng is None:
        rng = random.Random()

    try:
        with os.scandir(directory) as entries:
            images = [entry.name for entry in entries if not entry.is_dir() and _is_image(entry.name)]
    except OSError as exc:
        raise DirectoryUnreadable(directory) from exc

    # Sort first so the permutation depends only on the rng, not on listing order.
    images.sort()
    rng.shuffle(images)
    catalog = images[: max(limit, 0)]
    logger.info("Loaded %d of %d images from %s", len(catalog), len(images), directory)
    return catalog
