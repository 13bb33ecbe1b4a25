import os


# PUBLIC_INTERFACE
def canonical_answer(image_id: str) -> str:
    """Return the filename without its final extension; this is the expected answer."""
    return os.path.splitext(image_id)[0]


# PUBLIC_INTERFACE
def evaluate(image_id: str, user_input: str) -> bool:
    """
    Judge a submitted answer against the image's canonical answer.

    Both sides are trimmed and compared case-insensitively. There is no partial
    credit: anything other than an exact match is wrong.

    Args:
        image_id: The image filename.
        user_input: Raw text submitted by the user.

    Returns:
        bool: True on an exact match after trimming.
    """
    return (user_input or "").strip().lower() == canonical_answer(image_id).strip().lower()
