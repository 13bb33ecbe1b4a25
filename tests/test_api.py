import random

from fastapi.testclient import TestClient

from image_quiz.api.main import app, get_store
from image_quiz.config import get_settings
from image_quiz.storage.session_store import SessionStore


def _cookie_name() -> str:
    return get_settings().session_cookie


def test_health(client, image_dir) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"message": "Healthy", "image_dir": str(image_dir)}


def test_requests_without_session_are_404(client) -> None:
    assert client.get("/question").status_code == 404
    assert client.post("/answer", json={"answer": "cat"}).status_code == 404
    assert client.post("/next").status_code == 404
    assert client.post("/restart").status_code == 404
    assert client.get("/result").status_code == 404
    response = client.get("/status")
    assert response.status_code == 404
    assert response.json()["detail"] == "No active quiz session"


def test_start_sets_cookie_and_returns_question(client) -> None:
    response = client.post("/session", json={"mode": "subject"})
    assert response.status_code == 201
    assert _cookie_name() in response.cookies
    body = response.json()
    assert body["position"] == 0
    assert body["number"] == 1
    assert body["total"] == 5
    assert body["progress_percent"] == 0.0
    assert body["choices"] is None
    assert body["image_url"] == f"/images/{body['image_id']}"

    assert client.get("/question").json()["image_id"] == body["image_id"]


def test_start_rejects_unknown_mode(client) -> None:
    assert client.post("/session", json={"mode": "essay"}).status_code == 422


def test_multiple_mode_has_choices(client) -> None:
    body = client.post("/session", json={"mode": "multiple"}).json()
    answer = body["image_id"].rsplit(".", 1)[0]
    assert answer in body["choices"]
    assert len(body["choices"]) == 4
    assert client.get("/question").json()["choices"] == body["choices"]


def test_answer_flow_and_conflicts(client) -> None:
    question = client.post("/session", json={"mode": "subject"}).json()
    expected = question["image_id"].rsplit(".", 1)[0]

    assert client.post("/next").status_code == 409

    response = client.post("/answer", json={"answer": f"  {expected.upper()} "})
    assert response.status_code == 200
    assert response.json() == {"is_correct": True, "answer": expected}

    assert client.post("/answer", json={"answer": expected}).status_code == 409

    response = client.post("/next")
    assert response.status_code == 200
    body = response.json()
    assert body["done"] is False
    assert body["result"] is None
    assert body["question"]["position"] == 1
    assert body["question"]["number"] == 2
    assert body["question"]["score"] == 1

    assert client.get("/status").json() == {"position": 1, "total": 5, "score": 1, "wrong_count": 0}


def test_full_quiz_result_and_restart(client) -> None:
    client.post("/session", json={"mode": "multiple"})
    missed = []
    done = None
    while done is None:
        image_id = client.get("/question").json()["image_id"]
        client.post("/answer", json={"answer": "nothing"})
        missed.append(image_id)
        body = client.post("/next").json()
        if body["done"]:
            done = body

    result = done["result"]
    assert result["score"] == 0
    assert result["total"] == 5
    assert result["rate_percent"] == 0
    assert [item["image_id"] for item in result["wrong_items"]] == missed
    assert all(item["user_input"] == "nothing" for item in result["wrong_items"])
    assert client.get("/result").json() == result
    assert client.get("/question").status_code == 409

    response = client.post("/restart")
    assert response.status_code == 200
    body = response.json()
    assert body["position"] == 0
    assert body["choices"] is not None
    assert client.get("/result").json()["wrong_items"] == []


def test_empty_catalog_is_server_error(make_image_dir) -> None:
    store = SessionStore(str(make_image_dir("notes.txt")), rng=random.Random(0))
    app.dependency_overrides[get_store] = lambda: store
    try:
        with TestClient(app) as test_client:
            response = test_client.post("/session", json={"mode": "subject"})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert "No quiz images" in response.json()["detail"]


def test_serves_images(client) -> None:
    response = client.get("/images/cat.jpg")
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    assert response.content == b"\x89PNG fake"


def test_image_route_rejects_unknown_or_foreign_files(client) -> None:
    assert client.get("/images/missing.jpg").status_code == 404
    assert client.get("/images/notes.txt").status_code == 404
    assert client.get("/images/..%2Fconftest.py").status_code == 404


def test_start_without_body_defaults_to_subject(client) -> None:
    response = client.post("/session")
    assert response.status_code == 201
    assert response.json()["choices"] is None


def test_restart_with_foreign_cookie_is_404(client) -> None:
    client.cookies.set(_cookie_name(), "made-up-id")
    assert client.post("/restart").status_code == 404
    assert client.get("/status").status_code == 404


def test_new_start_replaces_other_clients_session(client, store) -> None:
    other_id, _ = store.start_session("multiple")
    response = client.post("/session", json={"mode": "subject"})
    assert response.status_code == 201
    assert response.cookies[_cookie_name()] != other_id
    assert client.get("/status").status_code == 200
