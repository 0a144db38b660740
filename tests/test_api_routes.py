from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.app.api.deps import get_gateway
from backend.app.config import Settings
from backend.app.main import app
from backend.app.services.completion_gateway import CompletionGateway
from tests.conftest import provider_error


@pytest.fixture
def client(gateway: CompletionGateway):
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client) -> None:
    assert client.get("/health").json() == {"ok": True}


def test_openai_route_success(client, fake_client) -> None:
    r = client.post("/api/openai", json={"messages": [{"role": "user", "content": "Hi"}]})

    assert r.status_code == 200
    assert r.json() == {"response": {"role": "assistant", "content": "Hello from the model"}}


def test_openai_route_malformed_json(client) -> None:
    r = client.post("/api/openai", content=b"{oops", headers={"Content-Type": "application/json"})

    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON in request body"}


def test_openai_route_missing_messages(client, fake_client) -> None:
    r = client.post("/api/openai", json={"messages": []})

    assert r.status_code == 400
    assert r.json() == {"error": "Messages array is required"}
    assert fake_client.chat.completions.create.call_count == 0


def test_openai_route_deeply_nested_body(client, fake_client) -> None:
    r = client.post("/api/openai", content=b"[" * 200000, headers={"Content-Type": "application/json"})

    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON in request body"}
    assert fake_client.chat.completions.create.call_count == 0


def test_openai_route_invalid_message(client) -> None:
    r = client.post("/api/openai", json={"messages": [{"role": "bot", "content": "Hi"}]})

    assert r.status_code == 400
    assert r.json() == {"error": "Invalid message format"}


def test_openai_route_model_unavailable(client, fake_client) -> None:
    fake_client.chat.completions.create.side_effect = provider_error(404, "model not found")

    r = client.post("/api/openai", json={"messages": [{"role": "user", "content": "Hi"}]})

    assert r.status_code == 503
    assert r.json() == {"error": "Model not found or not available"}


def test_openai_route_without_key(fake_client, sleep) -> None:
    app.dependency_overrides[get_gateway] = lambda: CompletionGateway(Settings(openai_api_key=""), sleep=sleep)
    try:
        r = TestClient(app).post("/api/openai", json={"messages": [{"role": "user", "content": "Hi"}]})
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json() == {"error": "OpenAI API key is not configured"}


def test_data_metrics(client) -> None:
    body = client.get("/data/metrics").json()

    assert body["ok"] is True
    assert body["metrics"] == {
        "total_employees": 8,
        "active_employees": 6,
        "turnover_rate": 25,
        "avg_training_hours": 39,
    }
    assert body["by_position"][0] == {"position": "Frontend Developer", "count": 2}


def test_data_employees(client) -> None:
    employees = client.get("/data/employees").json()["employees"]

    assert len(employees) == 8
    assert employees[2]["quit_date"] == "2023-11-15"
    assert employees[0]["quit_date"] is None


def test_openai_status_reports_settings(client) -> None:
    body = client.get("/system/openai-status").json()
    assert body["ok"] is True
    assert body["max_attempts"] == 3


def test_vacancy_parse_route(client) -> None:
    reply = "1) Remote backend role\n2)\n- Python\n- SQL\n3) 200k\n4)\n- Why us?\n"

    r = client.post("/api/vacancy/parse", json={"reply": reply})

    assert r.status_code == 200
    assert r.json() == {
        "ok": True,
        "vacancy": {
            "description": "Remote backend role",
            "skills": ["- Python", "- SQL"],
            "salary": "200k",
            "questions": ["- Why us?"],
        },
    }


def test_vacancy_parse_route_empty_reply(client) -> None:
    body = client.post("/api/vacancy/parse", json={}).json()

    assert body["vacancy"] == {"description": "", "skills": [], "salary": "", "questions": []}
