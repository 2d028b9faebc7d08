"""Structured chat completions with forced function calling and retries."""

from .client import DEFAULT_MAX_RETRIES, CompletionMode, StructuredCompletionClient
from .transport import ChatCompletionsTransport, LiteLLMTransport, Transport

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "CompletionMode",
    "StructuredCompletionClient",
    "Transport",
    "LiteLLMTransport",
    "ChatCompletionsTransport",
]
