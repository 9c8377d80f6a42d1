"""
Tests for the HTTP layer (FastAPI TestClient, engine injected).
"""
import pytest
from fastapi.testclient import TestClient

from app_fastapi import app
from brain import get_engine
from tests.utils.payloads import classification


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Incident Reporting Backend is running"}

    def test_health(self, client):
        assert client.get("/api/health").json()["status"] == "ok"


class TestChat:

    def test_chat_turn(self, client, llm):
        llm.queue(classification("FACILITY", 0.8, "A broken door."))

        response = client.post(
            "/api/chat",
            json={"sessionId": "web-1", "message": "The door is broken", "imageUrl": "https://img.example/1.jpg"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["incidentType"] == "FACILITY"
        assert body["workflowState"] == "AWAITING_CLASSIFICATION_CONFIRMATION"
        assert body["suggestedActions"] == ["Yes", "No"]
        assert "resources" not in body

    def test_engine_errors_are_still_200(self, client, llm):
        llm.queue("not json at all")

        response = client.post("/api/chat", json={"sessionId": "web-1", "message": "The door is broken"})

        assert response.status_code == 200
        assert response.json()["metadata"] == {"error": "format_error"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"sessionId": "web-1", "message": "   "},
            {"sessionId": "", "message": "hello"},
            {"message": "hello"},
        ],
    )
    def test_invalid_request(self, client, llm, payload):
        assert client.post("/api/chat", json=payload).status_code == 422
        assert llm.calls == 0


class TestSession:

    def test_unknown_session_is_404(self, client):
        assert client.get("/api/session/nope").status_code == 404

    def test_inspect_and_clear(self, client, llm):
        llm.queue(classification("HUMAN"))
        client.post("/api/chat", json={"sessionId": "web-2", "message": "My manager yells at me"})

        view = client.get("/api/session/web-2").json()
        assert view["incidentType"] == "HUMAN"
        assert view["workflowState"] == "AWAITING_CLASSIFICATION_CONFIRMATION"
        assert view["initialMessage"] == "My manager yells at me"

        assert client.delete("/api/session/web-2").json() == {"sessionId": "web-2", "cleared": True}
        assert client.delete("/api/session/web-2").json() == {"sessionId": "web-2", "cleared": False}
        assert client.get("/api/session/web-2").status_code == 404

    def test_session_id_with_slash(self, client, llm):
        llm.queue(classification("HUMAN"))

        response = client.post("/api/chat", json={"sessionId": "team/alice", "message": "My manager yells at me"})

        assert response.status_code == 200
        assert response.json()["workflowState"] == "AWAITING_CLASSIFICATION_CONFIRMATION"
