"""Schema handling for structured LLM responses.

This module provides:
- Conversion of Pydantic models and JSON schemas into function descriptors
- A pluggable adapter interface for other schema systems
- Optional validation of extracted function arguments
"""

from .adapters import (
    DEFAULT_FUNCTION_DESCRIPTION,
    BaseSchemaAdapter,
    FunctionDescriptor,
    PydanticSchemaAdapter,
)
from .validators import model_from_json_schema, parse_arguments

__all__ = [
    # Adapters
    "BaseSchemaAdapter",
    "DEFAULT_FUNCTION_DESCRIPTION",
    "FunctionDescriptor",
    "PydanticSchemaAdapter",
    # Validators
    "model_from_json_schema",
    "parse_arguments",
]
