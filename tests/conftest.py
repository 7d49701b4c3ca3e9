"""
Shared fixtures for gateway and dashboard tests.
"""
import json
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from main import create_app
from nova_health.config.settings import Settings, get_settings
from nova_health.controllers.chat_controller import ChatController


class FakeInferenceClient:
    """Stands in for Bedrock: records prompts and returns a canned body."""

    def __init__(self, body: str = "", error: Optional[Exception] = None):
        self.body = body
        self.error = error
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.body


def titan_body(text: str) -> str:
    return json.dumps({"results": [{"outputText": text}]})


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer environment variables out of Settings."""
    for name in list(Settings.model_fields) + ["SYSTEM_ENVIRONMENT"]:
        monkeypatch.delenv(name.upper(), raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(chat_history_limit=10)


@pytest.fixture
def fake_inference() -> FakeInferenceClient:
    return FakeInferenceClient(body=titan_body(" Hello! "))


@pytest.fixture
def controller(fake_inference, settings) -> ChatController:
    return ChatController(inference_client=fake_inference, settings=settings)


@pytest.fixture
def client(controller) -> TestClient:
    return TestClient(create_app(chat_controller=controller))


@pytest.fixture
def scenario_payload() -> dict:
    return {
        "message": "How am I doing?",
        "userId": "azmath",
        "healthData": {
            "steps": 3842,
            "bmi": "24.2",
            "medications": [
                {"name": "A", "taken": True},
                {"name": "B", "taken": False},
                {"name": "C", "taken": False},
            ],
            "medicationReminder": "Next medication due soon: Atorvastatin (20mg) at 20:00.",
        },
    }
