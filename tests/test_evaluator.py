from image_quiz.services.evaluator import canonical_answer, evaluate


def test_canonical_answer_strips_final_extension() -> None:
    assert canonical_answer("cat.jpg") == "cat"
    assert canonical_answer("New York.photo.png") == "New York.photo"
    assert canonical_answer(" Mixed Case .webp") == " Mixed Case "
    assert canonical_answer("noext") == "noext"


def test_evaluate_trims_and_ignores_case() -> None:
    assert evaluate("cat.jpg", "CAT ") is True
    assert evaluate("cat.jpg", "  cat") is True
    assert evaluate(" Mixed Case .webp", "mixed case") is True


def test_evaluate_rejects_mismatches() -> None:
    assert evaluate("cat.jpg", " dog") is False
    assert evaluate("cat.jpg", "") is False
    assert evaluate("cat.jpg", "ca") is False
    assert evaluate("cat.jpg", "cat.jpg") is False
    assert evaluate("cat.jpg", "c a t") is False
