"""Validation of extracted function arguments against Pydantic models."""

import json
from typing import Any

from pydantic import BaseModel, ValidationError, create_model

from structured_llm_client.exceptions import SchemaValidationException

_JSON_TYPE_MAPPING: dict[str, type[Any]] = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "array": list,
    "object": dict,
    "null": type(None),
}


def parse_arguments(arguments: Any, target_model: type[BaseModel]) -> BaseModel:
    """Decode a function-call arguments payload and validate it.

    Args:
        arguments: JSON text (``str`` or ``bytes``) or an already decoded mapping
        target_model: Pydantic model to validate against

    Returns:
        Validated model instance

    Raises:
        SchemaValidationException: If the payload is not JSON or fails validation
    """
    if isinstance(arguments, (bytes, bytearray)):
        arguments = arguments.decode("utf-8")

    if isinstance(arguments, str):
        response_text = arguments
        try:
            data = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise SchemaValidationException(
                f"Function arguments are not valid JSON: {e}",
                schema=target_model.__name__,
                response_text=response_text,
                validation_errors=[str(e)],
            ) from e
    else:
        data = arguments
        response_text = json.dumps(arguments, default=str)

    try:
        return target_model.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationException(
            f"Function arguments do not match {target_model.__name__}: "
            f"{e.error_count()} validation error(s)",
            schema=target_model.__name__,
            response_text=response_text,
            validation_errors=_format_validation_errors(e),
        ) from e


def model_from_json_schema(
    schema_dict: dict[str, Any], model_name: str
) -> type[BaseModel]:
    """Generate a Pydantic model from an object JSON schema.

    Only top-level properties are typed; nested objects validate as ``dict``.

    Args:
        schema_dict: Object-typed JSON schema dictionary
        model_name: Name for the generated model

    Returns:
        Generated Pydantic model class
    """
    properties = schema_dict.get("properties", {})
    required_fields = schema_dict.get("required", [])

    field_definitions: dict[str, Any] = {}
    for field_name, field_schema in properties.items():
        python_type = _python_type_for(field_schema.get("type"))

        if field_name in required_fields:
            field_definitions[field_name] = (python_type, ...)
        else:
            field_definitions[field_name] = (python_type | None, None)

    return create_model(model_name, **field_definitions)  # type: ignore[call-overload]


def _python_type_for(json_type: Any) -> Any:
    # "type" may be a single name or a list of names, e.g. ["string", "null"]
    if isinstance(json_type, list):
        members = [_JSON_TYPE_MAPPING.get(member) for member in json_type]
        if not members or any(member is None for member in members):
            return Any
        union = members[0]
        for member in members[1:]:
            union = union | member
        return union

    if isinstance(json_type, str):
        return _JSON_TYPE_MAPPING.get(json_type, Any)

    return Any


def _format_validation_errors(error: ValidationError) -> list[str]:
    formatted = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        formatted.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return formatted
