"""Schema adapters that turn schemas into forced-call function descriptors."""

import copy
import hashlib
import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, PydanticUserError

from structured_llm_client.exceptions import SchemaConversionError
from structured_llm_client.schema.validators import (
    model_from_json_schema,
    parse_arguments,
)

DEFAULT_FUNCTION_DESCRIPTION = "Provide structured response according to schema"

# Function names accepted by OpenAI-compatible chat endpoints
_MAX_FUNCTION_NAME_LENGTH = 64
_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")

_UNION_KEYWORDS = ("anyOf", "oneOf", "allOf")


@dataclass(frozen=True)
class FunctionDescriptor:
    """Function signature offered to the model for a single structured call.

    Args:
        name: Function name the model is forced to invoke.
        description: Human-readable description of the function.
        properties: JSON Schema descriptors keyed by field name.
        required: Mandatory field names, in declaration order.
    """

    name: str
    description: str
    properties: dict[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    @property
    def parameters(self) -> dict[str, Any]:
        """Object-shaped parameter schema for the function."""
        return {
            "type": "object",
            "properties": copy.deepcopy(self.properties),
            "required": list(self.required),
        }

    def to_function(self) -> dict[str, Any]:
        """Render as an entry of the legacy ``functions`` request list."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }

    def to_tool(self) -> dict[str, Any]:
        """Render as an entry of the ``tools`` request list."""
        return {"type": "function", "function": self.to_function()}


class BaseSchemaAdapter(ABC):
    """Base class for schema-system adapters."""

    @abstractmethod
    def convert(self, schema: Any) -> FunctionDescriptor:
        """Convert a schema into a function descriptor.

        Args:
            schema: Schema describing an object shape

        Returns:
            Function descriptor derived deterministically from the schema

        Raises:
            SchemaConversionError: If the schema is not object-shaped
        """
        pass

    @abstractmethod
    def parse(self, schema: Any, arguments: Any) -> Any:
        """Validate extracted function arguments against the schema.

        Args:
            schema: Schema the arguments were requested for
            arguments: Raw arguments payload returned by the model

        Returns:
            Parsed value in the schema system's native representation
        """
        pass


class PydanticSchemaAdapter(BaseSchemaAdapter):
    """Schema adapter for Pydantic models and plain JSON schema dicts."""

    def convert(self, schema: type[BaseModel] | dict[str, Any]) -> FunctionDescriptor:
        """Convert a Pydantic model class or JSON schema dict.

        Nested model references are inlined so that every property is
        self-contained.

        Args:
            schema: Pydantic model class or object-typed JSON schema dict

        Returns:
            Function descriptor for the schema

        Raises:
            SchemaConversionError: If the schema cannot be represented as a
                flat object-shaped function signature
        """
        raw_schema = self._to_json_schema(schema)
        definitions = {
            **raw_schema.get("definitions", {}),
            **raw_schema.get("$defs", {}),
        }
        schema_dict = self._inline_refs(raw_schema, definitions, (), schema)

        for keyword in _UNION_KEYWORDS:
            if keyword in schema_dict:
                raise SchemaConversionError(
                    f"Top-level '{keyword}' schemas cannot be function parameters",
                    schema=schema,
                )

        schema_type = schema_dict.get("type")
        if schema_type != "object" and not (
            schema_type is None and "properties" in schema_dict
        ):
            raise SchemaConversionError(
                f"Expected an object schema, got type '{schema_type}'",
                schema=schema,
            )

        return FunctionDescriptor(
            name=self._generate_function_name(schema_dict),
            description=schema_dict.get("description") or DEFAULT_FUNCTION_DESCRIPTION,
            properties=schema_dict.get("properties", {}),
            required=tuple(schema_dict.get("required", [])),
        )

    def parse(
        self, schema: type[BaseModel] | dict[str, Any], arguments: Any
    ) -> BaseModel:
        """Validate arguments into a Pydantic model instance.

        Dict schemas are validated through a model generated from their
        top-level properties.

        Args:
            schema: Pydantic model class or JSON schema dict
            arguments: JSON string or mapping returned by the model

        Returns:
            Validated model instance

        Raises:
            SchemaValidationException: If the arguments do not match the schema
        """
        if _is_model_class(schema):
            target_model = schema
        else:
            descriptor = self.convert(schema)
            target_model = model_from_json_schema(
                descriptor.parameters, descriptor.name
            )

        return parse_arguments(arguments, target_model)

    def _to_json_schema(self, schema: Any) -> dict[str, Any]:
        if _is_model_class(schema):
            try:
                return schema.model_json_schema()
            except PydanticUserError as e:
                raise SchemaConversionError(
                    f"Cannot generate JSON schema for {schema.__name__}: {e}",
                    schema=schema,
                ) from e

        if isinstance(schema, dict):
            return schema

        raise SchemaConversionError(
            f"Unsupported schema type: {type(schema).__name__}", schema=schema
        )

    def _inline_refs(
        self,
        node: Any,
        definitions: dict[str, Any],
        seen: tuple[str, ...],
        schema: Any,
    ) -> Any:
        """Recursively replace ``$ref`` entries with their definitions.

        Args:
            node: Schema fragment to process
            definitions: Shared ``$defs``/``definitions`` of the root schema
            seen: Definition names on the current resolution path
            schema: Root schema, reported on failure

        Returns:
            Copy of the fragment without references
        """
        if isinstance(node, list):
            return [self._inline_refs(item, definitions, seen, schema) for item in node]

        if not isinstance(node, dict):
            return node

        ref = node.get("$ref")
        if isinstance(ref, str):
            ref_name = ref.rsplit("/", 1)[-1]
            if ref_name in seen:
                raise SchemaConversionError(
                    f"Recursive reference '{ref}' cannot be inlined", schema=schema
                )
            if ref_name not in definitions:
                raise SchemaConversionError(
                    f"Unresolvable reference '{ref}'", schema=schema
                )

            resolved = self._inline_refs(
                definitions[ref_name], definitions, (*seen, ref_name), schema
            )
            # Sibling keywords (description, default) override the definition
            siblings = {
                key: self._inline_refs(value, definitions, seen, schema)
                for key, value in node.items()
                if key not in ("$ref", "$defs", "definitions")
            }
            return {**resolved, **siblings}

        # Older Pydantic releases wrap annotated references as a single allOf
        all_of = node.get("allOf")
        if (
            isinstance(all_of, list)
            and len(all_of) == 1
            and isinstance(all_of[0], dict)
        ):
            merged = {
                **all_of[0],
                **{key: value for key, value in node.items() if key != "allOf"},
            }
            return self._inline_refs(merged, definitions, seen, schema)

        return {
            key: self._inline_refs(value, definitions, seen, schema)
            for key, value in node.items()
            if key not in ("$defs", "definitions")
        }

    def _generate_function_name(self, schema_dict: dict[str, Any]) -> str:
        """Generate a stable function name for the schema.

        Args:
            schema_dict: JSON schema dictionary

        Returns:
            Function name valid for OpenAI-compatible APIs
        """
        for source in (schema_dict.get("title"), schema_dict.get("description")):
            if isinstance(source, str):
                name = _INVALID_NAME_CHARS.sub("_", source.strip().replace(" ", "_"))
                name = name[:_MAX_FUNCTION_NAME_LENGTH]
                if name.strip("_-"):
                    return name

        canonical = json.dumps(schema_dict, sort_keys=True, default=str)
        digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
        return f"schema_{digest[:8]}"


def _is_model_class(schema: Any) -> bool:
    # Generic aliases such as list[int] pass isinstance(type) but not issubclass
    try:
        return isinstance(schema, type) and issubclass(schema, BaseModel)
    except TypeError:
        return False
