"""Structured LLM Client - schema-shaped chat completions via forced function calls."""

__version__ = "0.1.0"

# Core client classes
from .completions import (
    DEFAULT_MAX_RETRIES,
    ChatCompletionsTransport,
    CompletionMode,
    LiteLLMTransport,
    StructuredCompletionClient,
    Transport,
)

# Custom exceptions
from .exceptions import (
    ConfigurationException,
    SchemaConversionError,
    SchemaValidationException,
    StructuredLLMException,
)

# Schema helpers
from .schema import (
    BaseSchemaAdapter,
    FunctionDescriptor,
    PydanticSchemaAdapter,
    parse_arguments,
)

# Configuration utilities
from .utils import (
    create_structured_client,
    get_available_providers,
    get_default_models,
    load_environment,
)

__all__ = [
    "__version__",
    "DEFAULT_MAX_RETRIES",
    "StructuredCompletionClient",
    "CompletionMode",
    "Transport",
    "LiteLLMTransport",
    "ChatCompletionsTransport",
    "BaseSchemaAdapter",
    "FunctionDescriptor",
    "PydanticSchemaAdapter",
    "parse_arguments",
    "load_environment",
    "create_structured_client",
    "get_available_providers",
    "get_default_models",
    # Exceptions
    "StructuredLLMException",
    "SchemaConversionError",
    "SchemaValidationException",
    "ConfigurationException",
]
