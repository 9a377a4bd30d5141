from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from pocketllm.core.command_generator import CommandGenerationService
from pocketllm.core.summarizer import SummarizationService


def _generate(inputs):
    if isinstance(inputs, list):
        return "ls -la\nbecause you want to see files\ncat file.txt"
    return inputs + " Everything is fine."


@pytest.fixture
def client(test_settings, make_engine_factory):
    with patch("pocketllm.main.initialize_gpu", return_value="cpu"):
        from pocketllm.main import app
        with TestClient(app) as c:
            app.state.summarizer = SummarizationService(
                test_settings, engine_factory=make_engine_factory(output=_generate)
            )
            app.state.command_generator = CommandGenerationService(
                test_settings, engine_factory=make_engine_factory(output=_generate)
            )
            yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "device": "cpu"}


def test_system_requirements(client):
    resp = client.get("/v1/system/requirements")
    assert resp.status_code == 200
    assert resp.json()["min_ram"] == "4GB"


def test_summary_models(client):
    resp = client.get("/v1/summarize/models")
    assert resp.status_code == 200
    assert resp.json()["default"] == "distilgpt2"


def test_summary_status_initial(client):
    resp = client.get("/v1/summarize/status")
    assert resp.status_code == 200
    assert resp.json() == {"loaded": False, "loading": False, "error": None, "progress": 0}


def test_summarize_before_load(client):
    resp = client.post("/v1/summarize", json={"text": "hello"})
    assert resp.status_code == 409
    assert "No model loaded" in resp.json()["detail"]


def test_summarize_flow(client):
    resp = client.post("/v1/summarize/load", json={})
    assert resp.status_code == 200
    data = resp.json()
    assert data["model_id"] == "distilgpt2"
    assert data["family"] == "continuation"
    assert data["status"]["loaded"] is True

    resp = client.post("/v1/summarize", json={"text": "All systems nominal."})
    assert resp.status_code == 200
    data = resp.json()
    assert data["summary"] == "Everything is fine."
    assert data["input_tokens"] == 5
    assert "tokens_per_second" in data["metrics"]

    resp = client.delete("/v1/summarize/model")
    assert resp.status_code == 200
    assert client.get("/v1/summarize/status").json()["loaded"] is False


def test_load_unknown_model(client):
    resp = client.post("/v1/summarize/load", json={"model_key": "missing"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Model missing not found"


def test_commands_flow(client):
    resp = client.post("/v1/commands/load", json={})
    assert resp.status_code == 200
    assert resp.json()["family"] == "chat"

    resp = client.post(
        "/v1/commands",
        json={
            "goal": "list files",
            "system": {"os": "Linux", "arch": "x86_64", "shell": "bash", "installed_tools": ["ls"]},
        },
    )
    assert resp.status_code == 200
    assert resp.json()["commands"] == ["ls -la", "cat file.txt"]


def test_commands_before_load(client):
    resp = client.post("/v1/commands", json={"goal": "list files"})
    assert resp.status_code == 409


def test_commands_missing_goal(client):
    resp = client.post("/v1/commands", json={"system": {}})
    assert resp.status_code == 422


def test_command_models(client):
    resp = client.get("/v1/commands/models")
    assert resp.status_code == 200
    keys = [m["key"] for m in resp.json()["models"]]
    assert "qwen2.5-coder" in keys
    assert resp.json()["models"][0]["candidates"][0] == "Qwen/Qwen2.5-Coder-0.5B-Instruct"
