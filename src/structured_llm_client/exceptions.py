"""Custom exceptions for the structured LLM client."""

from typing import Any


class StructuredLLMException(Exception):
    """Base exception for the structured LLM client.

    All custom exceptions in this package should inherit from this base class.
    Errors raised by the chat-completion transport are never wrapped in one of
    these; they reach the caller as the original exception object.
    """

    pass


class SchemaConversionError(StructuredLLMException):
    """Raised when a schema cannot be turned into a function descriptor.

    This exception is raised when:
    - The schema is neither a Pydantic model class nor a JSON schema dict
    - The top-level schema is a scalar, array or union instead of an object
    - The schema contains a recursive or unresolvable ``$ref``

    It is raised before any transport call is made and is never retried.

    Attributes:
        schema: The schema that could not be converted
    """

    def __init__(self, message: str, schema: Any | None = None):
        super().__init__(message)
        self.schema = schema


class SchemaValidationException(StructuredLLMException):
    """Raised when extracted arguments fail schema validation.

    This exception is raised when:
    - The arguments payload is not valid JSON
    - Pydantic model validation fails, including cross-field validators

    Attributes:
        schema: The schema that failed validation
        response_text: The payload that failed to validate
        validation_errors: List of validation error details
    """

    def __init__(
        self,
        message: str,
        schema: str | None = None,
        response_text: str | None = None,
        validation_errors: list[str] | None = None,
    ):
        super().__init__(message)
        self.schema = schema
        self.response_text = response_text
        self.validation_errors = validation_errors or []


class ConfigurationException(StructuredLLMException):
    """Raised when configuration errors occur.

    This exception is raised when:
    - Required credentials are missing from both arguments and environment

    Attributes:
        config_key: The configuration key that caused the error
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
    ):
        super().__init__(message)
        self.config_key = config_key
