"""Pytest configuration and fixtures for Problem Clarifier tests."""

import json
import random

import pytest

from problem_clarifier.core.generator import ClarificationGenerator
from problem_clarifier.settings.storage import SettingsStorage


class FakeResponse:
    """Minimal stand-in for an aiohttp response context manager."""

    def __init__(self, status: int, body: str):
        self.status = status
        self._body = body

    async def text(self) -> str:
        return self._body

    async def json(self, content_type=None):
        return json.loads(self._body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records POST calls and answers with a canned response."""

    def __init__(self, status: int = 200, body: str = "{}"):
        self.status = status
        self.body = body
        self.calls = []

    def post(self, url, json=None, headers=None, **kwargs):
        self.calls.append({"url": url, "json": json, "headers": headers})
        return FakeResponse(self.status, self.body)


def completion_body(content: str, model: str = "sonar-pro") -> str:
    """Build a chat-completions response envelope around content."""
    return json.dumps({
        "id": "cmpl-123",
        "model": model,
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 120, "completion_tokens": 300, "total_tokens": 420},
    })


@pytest.fixture
def sample_reply():
    """A complete clarification as the service would return it."""
    return {
        "problemStatement": "Small teams lose hours every week reconciling spreadsheets.",
        "targetUsers": "Operations leads at companies with 5-50 employees.",
        "userPainPoints": ["Manual copy-paste between sheets", "Version conflicts"],
        "solutionDirection": "A shared ledger that syncs with existing spreadsheets.",
        "keyFeatures": ["Two-way sync", "Conflict highlighting"],
        "assumptionsRisks": "Assumes teams keep using spreadsheets.",
        "successMetrics": ["Hours saved per week"],
        "technicalConsiderations": "Spreadsheet APIs have strict rate limits.",
        "nextSteps": ["Interview 10 operations leads"],
    }


@pytest.fixture
def fake_session():
    """Factory for FakeSession instances."""
    return FakeSession


@pytest.fixture
def envelope():
    """Builder for chat-completions response bodies."""
    return completion_body


@pytest.fixture
def generator():
    """Generator with an unseeded random source."""
    return ClarificationGenerator()


@pytest.fixture
def seeded_generator():
    """Generator with a fixed seed for reproducible variation output."""
    return ClarificationGenerator(rng=random.Random(1234))


@pytest.fixture
def storage(tmp_path):
    """Settings storage rooted in a temporary directory."""
    return SettingsStorage(config_dir=tmp_path / ".problem-clarifier")


@pytest.fixture
def no_env_key(monkeypatch):
    """Ensure no API key leaks in from the environment."""
    monkeypatch.delenv("PERPLEXITY_API_KEY", raising=False)
