"""Pytest configuration and fixtures for the canvas command API."""

import json
from typing import Any, Generator, Optional

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from routers.canvas_router import get_command_service
from services.canvas_command_service import CanvasCommandService


class FakeLLM:
    """Stands in for LLMService; records prompts and replays a canned reply."""

    def __init__(self, payload: Any = None, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, str]] = []
        self.is_configured = True

    async def generate(self, system_prompt: str, user_prompt: str) -> Any:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.payload


def gemini_reply(text: str) -> dict:
    """A generateContent reply carrying ``text`` as its only part."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finish_reason": "STOP"}
        ]
    }


def fenced(data: Any) -> str:
    return f"Here you go:\n```json\n{json.dumps(data, indent=2)}\n```"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        gemini_api_key=None,
        gemini_model="gemini-test",
        allowed_origins="http://localhost:3000",
    )


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM(payload=gemini_reply(json.dumps({"actions": [], "message": "Nothing to do"})))


@pytest.fixture
def command_service(test_settings: Settings, fake_llm: FakeLLM) -> CanvasCommandService:
    return CanvasCommandService(test_settings, fake_llm)


@pytest.fixture
def client(test_settings: Settings, command_service: CanvasCommandService) -> Generator[TestClient, None, None]:
    """Test client whose command service talks to FakeLLM."""
    app = create_app(test_settings)
    app.dependency_overrides[get_command_service] = lambda: command_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def two_object_canvas() -> dict:
    return {
        "canvasWidth": 1080,
        "canvasHeight": 1080,
        "selectedObjectIds": [],
        "objects": [
            {"id": "obj_0", "type": "image", "name": "logo", "left": 40, "top": 40,
             "width": 200, "height": 120, "scaleX": 1, "scaleY": 1},
            {"id": "obj_1", "type": "textbox", "name": "headline", "left": 300, "top": 600,
             "width": 480, "height": 64, "scaleX": 1, "scaleY": 1},
        ],
    }
