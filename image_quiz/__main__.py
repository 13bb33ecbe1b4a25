"""
Entry point for the image quiz service.

Run locally with:

```
python -m image_quiz
```
"""

import logging
import sys

import uvicorn

from .config import get_settings
from .services.catalog import load_catalog
from .services.errors import DirectoryUnreadable

logger = logging.getLogger("image_quiz")


# PUBLIC_INTERFACE
def main() -> int:
    """
    Check the image directory, then serve the API with uvicorn.

    Returns:
        int: Process exit status; 1 when the image directory is unusable.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        images = load_catalog(settings.image_dir, limit=settings.max_images)
    except DirectoryUnreadable:
        logger.error("Image directory '%s' not found. Create it and put quiz images inside.", settings.image_dir)
        return 1
    if not images:
        logger.error("Image directory '%s' contains no images.", settings.image_dir)
        return 1
    logger.info("%d images ready, serving on http://%s:%d", len(images), settings.host, settings.port)

    config = uvicorn.Config("image_quiz.api.main:app", host=settings.host, port=settings.port, log_level="info")
    uvicorn.Server(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
