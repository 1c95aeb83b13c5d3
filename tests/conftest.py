"""Shared pytest fixtures for the linguaflow test suite.

Provides:
  - MockLLMProvider: records calls, returns configurable text or raises
  - MockRedisClient: in-memory stand-in for RedisClient counters and TTLs
  - FakeClock: manually advanced monotonic clock for rate-limit windows
  - test_settings / app / client: a fully wired app with the LLM mocked

All external service calls are mocked in every test, no network usage.
The lifespan still runs, so OPENAI_API_KEY is set to a dummy value.
"""

from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from linguaflow.api.deps import get_llm_provider
from linguaflow.core.config import Settings
from linguaflow.core.exceptions import ExternalServiceError
from linguaflow.core.security import redact_error_message
from linguaflow.main import create_app
from linguaflow.services.llm.base import LLMProvider, LLMResponse


# ---------------------------------------------------------------------------
# Mock LLM Provider
# ---------------------------------------------------------------------------


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for testing. Returns configurable responses.

    When ``error`` is set, ``generate`` fails the way the real provider
    does: with an ExternalServiceError carrying a redacted message.
    """

    def __init__(
        self,
        generate_text: str = "Mock response",
        error: Exception | None = None,
    ) -> None:
        self.generate_text = generate_text
        self.error = error
        self.generate_calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
        failure_message: str = "Processing failed.",
    ) -> LLMResponse:
        self.generate_calls.append(
            {
                "prompt": prompt,
                "system_prompt": system_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise ExternalServiceError(
                redact_error_message(str(self.error), failure_message)
            ) from self.error
        return LLMResponse(
            text=self.generate_text,
            input_tokens=50,
            output_tokens=10,
        )


# ---------------------------------------------------------------------------
# Mock Redis Client
# ---------------------------------------------------------------------------


class MockRedisClient:
    """In-memory mock of RedisClient for testing."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self._ttls: dict[str, int] = {}

    async def increment(self, key: str, amount: int = 1) -> int:
        current = int(self._store.get(key, "0"))
        new_val = current + amount
        self._store[key] = str(new_val)
        return new_val

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        if key in self._store:
            self._ttls[key] = ttl_seconds
            return True
        return False

    async def ttl(self, key: str) -> int:
        if key not in self._store:
            return -2
        return self._ttls.get(key, -1)

    async def close(self) -> None:
        return None


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm() -> MockLLMProvider:
    """Mock LLM provider fixture."""
    return MockLLMProvider(generate_text="안녕하세요, 세계!")


@pytest.fixture
def mock_redis() -> MockRedisClient:
    """Mock Redis client fixture."""
    return MockRedisClient()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        openai_api_key="test-api-key",
        rate_limit_backend="memory",
        rate_limit_max_requests=10,
        rate_limit_window_seconds=60,
        trust_forwarded_for=False,
        default_target_language="ko",
    )


@pytest.fixture
def app(test_settings: Settings, mock_llm: MockLLMProvider) -> FastAPI:
    """Application with the LLM provider swapped for the mock."""
    application = create_app(test_settings)
    application.dependency_overrides[get_llm_provider] = lambda: mock_llm
    return application


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """TestClient with the lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
