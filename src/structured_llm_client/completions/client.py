"""Structured completion client: forced function calls with bounded retry."""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from types import SimpleNamespace
from typing import Any

from pydantic import BaseModel

from structured_llm_client.completions.transport import Transport
from structured_llm_client.schema.adapters import (
    BaseSchemaAdapter,
    FunctionDescriptor,
    PydanticSchemaAdapter,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3

# Caller parameters replaced by the forced single-function selection
_OVERRIDDEN_PARAMS = frozenset(
    {"functions", "function_call", "tools", "tool_choice", "stream"}
)


class CompletionMode(Enum):
    """How the function descriptor is offered to the model."""

    FUNCTIONS = "functions"
    TOOLS = "tools"


class StructuredCompletionClient:
    """Chat-completion client that returns schema-shaped function arguments.

    Every request offers the model exactly one function, derived from the
    response schema, and forces the model to call it. Failures of the transport
    call or of reading its response are retried without delay up to
    ``max_retries`` times; the last failure is re-raised unchanged.

    Args:
        transport: Chat-completion transport (see ``LiteLLMTransport``)
        adapter: Schema adapter, defaults to ``PydanticSchemaAdapter``
        mode: ``FUNCTIONS`` for ``functions``/``function_call`` requests,
            ``TOOLS`` for ``tools``/``tool_choice`` requests

    Example::

        client = StructuredCompletionClient(LiteLLMTransport(api_key="..."))
        arguments = await client.create(
            model="gpt-3.5-turbo",
            messages=[{"role": "user", "content": "Jason Liu is 30 years old"}],
            response_model=User,
        )
    """

    def __init__(
        self,
        transport: Transport,
        adapter: BaseSchemaAdapter | None = None,
        mode: CompletionMode | str = CompletionMode.FUNCTIONS,
    ) -> None:
        if transport is None:
            raise ValueError("Transport is required")

        self.transport = transport
        self.adapter = adapter or PydanticSchemaAdapter()
        self.mode = CompletionMode(mode)

        # OpenAI client shape: client.chat.completions.create(...)
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self.create))

    async def create(
        self,
        *,
        response_model: Any,
        max_retries: int = DEFAULT_MAX_RETRIES,
        **params: Any,
    ) -> Any:
        """Request schema-shaped arguments from the model.

        Args:
            response_model: Target schema (Pydantic model class or JSON schema dict)
            max_retries: Additional attempts allowed after a failed attempt
            **params: Chat parameters forwarded to the transport (``model``,
                ``messages``, sampling options)

        Returns:
            The raw function-call arguments payload from the first choice, or an
            empty dict when the response carries none

        Raises:
            ValueError: If ``max_retries`` is not a non-negative integer
            SchemaConversionError: If the schema cannot become a function
                descriptor; raised before any transport call
            Exception: The final transport or response-reading error once
                retries are exhausted
        """
        if (
            isinstance(max_retries, bool)
            or not isinstance(max_retries, int)
            or max_retries < 0
        ):
            raise ValueError(
                f"max_retries must be a non-negative integer, got {max_retries!r}"
            )

        attempt = 0
        while True:
            descriptor = self.adapter.convert(response_model)
            request = self._build_request(params, descriptor)

            logger.debug(
                "Requesting %s from %s (attempt %d of %d)",
                descriptor.name,
                request.get("model"),
                attempt + 1,
                max_retries + 1,
            )
            try:
                response = await self.transport.create(**request)
                return self._extract_arguments(response)
            except Exception as e:
                if attempt >= max_retries:
                    logger.error(
                        "Structured completion for %s failed after %d attempt(s): %s",
                        descriptor.name,
                        attempt + 1,
                        e,
                    )
                    raise
                attempt += 1
                logger.warning(
                    "Structured completion for %s failed, retrying (%d/%d): %s",
                    descriptor.name,
                    attempt,
                    max_retries,
                    e,
                )

    async def create_parsed(
        self,
        *,
        response_model: Any,
        max_retries: int = DEFAULT_MAX_RETRIES,
        **params: Any,
    ) -> BaseModel:
        """Request arguments and validate them with the schema adapter.

        Validation failures are not retried.

        Returns:
            Validated model instance

        Raises:
            SchemaValidationException: If the arguments do not match the schema
        """
        arguments = await self.create(
            response_model=response_model, max_retries=max_retries, **params
        )
        return self.adapter.parse(response_model, arguments)

    def _build_request(
        self, params: dict[str, Any], descriptor: FunctionDescriptor
    ) -> dict[str, Any]:
        """Merge caller parameters with the forced function selection.

        Args:
            params: Caller chat parameters, left untouched
            descriptor: Function descriptor for this attempt

        Returns:
            Fresh request parameters for the transport
        """
        overridden = _OVERRIDDEN_PARAMS.intersection(params)
        if overridden:
            logger.debug("Ignoring caller parameters: %s", sorted(overridden))

        request = {
            key: value for key, value in params.items() if key not in overridden
        }
        request["stream"] = False

        if self.mode is CompletionMode.TOOLS:
            request["tools"] = [descriptor.to_tool()]
            request["tool_choice"] = {
                "type": "function",
                "function": {"name": descriptor.name},
            }
        else:
            request["functions"] = [descriptor.to_function()]
            request["function_call"] = {"name": descriptor.name}

        return request

    def _extract_arguments(self, response: Any) -> Any:
        """Extract function-call arguments from the first choice.

        Args:
            response: Transport response (object or mapping)

        Returns:
            Arguments payload, or an empty dict when absent at any level
        """
        message = _get_field(_first(_get_field(response, "choices")), "message")

        if self.mode is CompletionMode.TOOLS:
            call = _get_field(_first(_get_field(message, "tool_calls")), "function")
        else:
            call = _get_field(message, "function_call")

        arguments = _get_field(call, "arguments")
        if arguments is None:
            logger.info("Response carried no function-call arguments")
            return {}

        return arguments


def _get_field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _first(items: Any) -> Any:
    if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
        return None
    if not items:
        return None
    return items[0]
