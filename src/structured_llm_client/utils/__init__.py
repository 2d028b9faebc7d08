"""Utility functions for environment and client configuration."""

from .config import (
    create_structured_client,
    get_available_providers,
    get_default_models,
    load_environment,
)

__all__ = [
    "load_environment",
    "create_structured_client",
    "get_available_providers",
    "get_default_models",
]
