"""Chat-completion transports consumed by the structured completion client."""

from typing import Any, Protocol, runtime_checkable

from litellm import acompletion


@runtime_checkable
class Transport(Protocol):
    """Anything that can issue a chat-completion request asynchronously."""

    async def create(self, **params: Any) -> Any:
        """Send a chat-completion request and return the provider response."""
        ...


class LiteLLMTransport:
    """Transport backed by LiteLLM for multi-provider support.

    Args:
        api_key: API key passed to every request, if set
        organization: OpenAI organization id passed to every request, if set
        **defaults: Request parameters applied to every call (e.g. ``timeout``);
            per-call parameters take precedence
    """

    def __init__(
        self,
        api_key: str | None = None,
        organization: str | None = None,
        **defaults: Any,
    ) -> None:
        self.api_key = api_key
        self.organization = organization
        self.defaults = defaults

    async def create(self, **params: Any) -> Any:
        """Send the request through ``litellm.acompletion``.

        Errors raised by LiteLLM propagate unchanged.
        """
        request: dict[str, Any] = {**self.defaults}
        if self.api_key is not None:
            request["api_key"] = self.api_key
        if self.organization is not None:
            request["organization"] = self.organization
        request.update(params)

        return await acompletion(**request)

    def __repr__(self) -> str:
        return (
            f"LiteLLMTransport(api_key_set={self.api_key is not None}, "
            f"defaults={sorted(self.defaults)})"
        )


class ChatCompletionsTransport:
    """Transport wrapping an OpenAI-style async client.

    Works with any object exposing an awaitable ``chat.completions.create``,
    such as ``openai.AsyncOpenAI``.

    Args:
        client: Async chat-completions client
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    async def create(self, **params: Any) -> Any:
        """Forward the request to ``client.chat.completions.create``."""
        return await self.client.chat.completions.create(**params)
