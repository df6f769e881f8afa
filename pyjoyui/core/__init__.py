"""
Core system components
"""

from .exceptions import (
    ErrorSeverity,
    PyJoyUIError,
    UIError,
    NotInstantiatedError,
    ElementNotFoundError,
    InstantiationError,
    EmptyHistoryError,
    TransitionError,
    ConfigurationError,
    ErrorHandler,
    get_error_handler,
    handle_error,
)
from .logging import get_logger, configure_logging

__all__ = [
    "ErrorSeverity",
    "PyJoyUIError",
    "UIError",
    "NotInstantiatedError",
    "ElementNotFoundError",
    "InstantiationError",
    "EmptyHistoryError",
    "TransitionError",
    "ConfigurationError",
    "ErrorHandler",
    "get_error_handler",
    "handle_error",
    "get_logger",
    "configure_logging",
]
