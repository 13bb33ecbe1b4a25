import random
from typing import List, Optional, Sequence

from .evaluator import canonical_answer

MAX_CHOICES = 4


# PUBLIC_INTERFACE
def build_choices(
    catalog: Sequence[str],
    index: int,
    rng: Optional[random.Random] = None,
    limit: int = MAX_CHOICES,
) -> List[str]:
    """
    Build the answer options for a multiple-choice question.

    The correct answer is always included. Distractors are the answers of other
    catalog images, picked in random order and deduplicated by answer text, so
    a small catalog yields fewer than ``limit`` options rather than padding.

    Args:
        catalog: The session's image filenames.
        index: Position of the image being asked about.
        rng: Randomness source; a fresh ``random.Random`` when omitted.
        limit: Maximum number of options.

    Returns:
        list[str]: Unique answers in random order.

    Raises:
        IndexError: if ``index`` is outside the catalog.
    """
    if not 0 <= index < len(catalog):
        raise IndexError(f"Question index {index} out of range for {len(catalog)} images")
    if rng is None:
        rng = random.Random()

    options = [canonical_answer(catalog[index])]
    pool = [pos for pos in range(len(catalog)) if pos != index]
    rng.shuffle(pool)
    for pos in pool:
        if len(options) >= limit:
            break
        candidate = canonical_answer(catalog[pos])
        if candidate not in options:
            options.append(candidate)

    rng.shuffle(options)
    return options
