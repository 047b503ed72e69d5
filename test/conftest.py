from dataclasses import replace
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from api.backend import BackendAPI
from api.main import create_app
from llm.llm_client import LLMClient
from spark_ai.config import Settings

class FakeProvider:
    name = "fake"

    def __init__(self, response_text: str = "", error: Exception | None = None):
        self._response_text = response_text
        self._error = error
        self.prompts = []

    def generate(self, *, prompt: str, max_tokens: int) -> str:
        self.prompts.append(prompt)
        if self._error is not None:
            raise self._error
        return self._response_text

@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str = "", error: Exception | None = None):
        return FakeProvider(response_text, error=error)
    return _make

@pytest.fixture
def settings():
    return Settings(llm_provider="mock", default_timezone="UTC")

@pytest.fixture
def fixed_clock():
    # Friday morning, before the 14:00 same-day slot
    def _clock(tz):
        return datetime(2025, 1, 10, 8, 30, tzinfo=tz)
    return _clock

@pytest.fixture
def client_factory(settings, fixed_clock):
    def _make(provider, **overrides):
        app_settings = replace(settings, **overrides)
        backend = BackendAPI(app_settings, llm_client=LLMClient(provider), clock=fixed_clock)
        return TestClient(create_app(app_settings, backend=backend))
    return _make
