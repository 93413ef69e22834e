"""Exceções do consoledi."""

from .exceptions import (
    ConfigurationError,
    ConsoleDIError,
    HandlerInvocationError,
    NoHandlersFoundError,
    ResourceScopeError,
    ServiceResolutionError,
)

__all__ = [
    "ConfigurationError",
    "ConsoleDIError",
    "HandlerInvocationError",
    "NoHandlersFoundError",
    "ResourceScopeError",
    "ServiceResolutionError",
]
