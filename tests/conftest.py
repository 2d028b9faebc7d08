"""Shared pytest configuration and fixtures for the test suite."""

import os
from types import SimpleNamespace
from typing import Any

import pytest
from pydantic import BaseModel, field_validator


class User(BaseModel):
    """A person mentioned in the conversation."""

    age: float
    name: str

    @field_validator("name")
    @classmethod
    def name_must_contain_space(cls, value: str) -> str:
        if " " not in value:
            raise ValueError("Name must contain a space")
        return value


class ScriptedTransport:
    """Transport that replays a fixed sequence of responses or errors."""

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[dict[str, Any]] = []

    async def create(self, **params: Any) -> Any:
        self.calls.append(params)
        index = min(len(self.calls), len(self._outcomes)) - 1
        outcome = self._outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def function_call_response(arguments: Any) -> SimpleNamespace:
    """Build a chat-completion response carrying a legacy function call."""
    return SimpleNamespace(
        choices=[
            SimpleNamespace(
                message=SimpleNamespace(
                    content=None,
                    function_call=SimpleNamespace(name="User", arguments=arguments),
                    tool_calls=None,
                )
            )
        ]
    )


def tool_call_response(arguments: Any) -> SimpleNamespace:
    """Build a chat-completion response carrying a tool call."""
    return SimpleNamespace(
        choices=[
            SimpleNamespace(
                message=SimpleNamespace(
                    content=None,
                    function_call=None,
                    tool_calls=[
                        SimpleNamespace(
                            id="call_1",
                            type="function",
                            function=SimpleNamespace(name="User", arguments=arguments),
                        )
                    ],
                )
            )
        ]
    )


@pytest.fixture
def user_model() -> type[User]:
    """Schema with a cross-field constraint on ``name``."""
    return User


@pytest.fixture
def chat_messages() -> list[dict[str, str]]:
    """Single-turn conversation used across client tests."""
    return [{"role": "user", "content": "Jason Liu is 30 years old"}]


@pytest.fixture
def sample_api_key() -> str:
    """Sample API key for testing."""
    return "test-api-key-12345"


@pytest.fixture
def openai_api_key() -> str:
    """Real OpenAI key for integration tests; skips when absent."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        pytest.skip("Integration tests require OPENAI_API_KEY")
    return api_key


@pytest.fixture
def make_transport() -> type[ScriptedTransport]:
    """Factory for transports replaying scripted outcomes."""
    return ScriptedTransport


@pytest.fixture
def make_function_call_response() -> Any:
    """Builder for responses carrying a legacy function call."""
    return function_call_response


@pytest.fixture
def make_tool_call_response() -> Any:
    """Builder for responses carrying a tool call."""
    return tool_call_response
