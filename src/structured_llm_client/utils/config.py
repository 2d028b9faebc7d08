"""Configuration utilities for environment-based setup."""

import os
from typing import Any

from dotenv import load_dotenv

from structured_llm_client.completions.client import (
    CompletionMode,
    StructuredCompletionClient,
)
from structured_llm_client.completions.transport import LiteLLMTransport
from structured_llm_client.exceptions import ConfigurationException


def load_environment() -> None:
    """Load environment variables from .env file if it exists."""
    load_dotenv()


def create_structured_client(
    api_key: str | None = None,
    organization: str | None = None,
    mode: CompletionMode | str = CompletionMode.FUNCTIONS,
    **defaults: Any,
) -> StructuredCompletionClient:
    """Create a structured completion client with environment-based configuration.

    Args:
        api_key: OpenAI API key (if None, loads from OPENAI_API_KEY env var)
        organization: OpenAI organization id (if None, loads from OPENAI_ORG_ID)
        mode: How the function descriptor is offered to the model
        **defaults: Request parameters applied to every transport call

    Returns:
        Configured StructuredCompletionClient over a LiteLLM transport

    Raises:
        ConfigurationException: If no API key is found in parameter or environment
    """
    load_environment()

    if api_key is None:
        api_key = os.getenv("OPENAI_API_KEY")

    if api_key is None:
        raise ConfigurationException(
            "OpenAI API key not found. Set OPENAI_API_KEY environment variable "
            "or pass api_key parameter.",
            config_key="OPENAI_API_KEY",
        )

    if organization is None:
        organization = os.getenv("OPENAI_ORG_ID")

    transport = LiteLLMTransport(
        api_key=api_key, organization=organization, **defaults
    )
    return StructuredCompletionClient(transport, mode=mode)


def get_available_providers() -> dict[str, bool]:
    """Check which providers have API keys available.

    Returns:
        Dictionary mapping provider names to availability status
    """
    load_environment()

    return {
        "openai": os.getenv("OPENAI_API_KEY") is not None,
        "anthropic": os.getenv("ANTHROPIC_API_KEY") is not None,
    }


def get_default_models() -> dict[str, str]:
    """Get default models for each provider.

    Returns:
        Dictionary mapping provider names to default model names
    """
    return {
        "openai": "gpt-3.5-turbo",
        "anthropic": "claude-3-haiku-20240307",
    }
