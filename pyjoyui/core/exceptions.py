"""
Exception handling framework for PyJoyUI.

UI operations are frequently speculative (opening a page that may not exist,
going back with an empty history), so most failures are reported rather than
raised: the caller builds the matching exception and hands it to the
ErrorHandler, which logs it and notifies registered callbacks. The operation
then degrades to a neutral result.
"""

import sys
import traceback
from typing import Any, Callable, Dict, List, Optional, Type
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class PyJoyUIError(Exception):
    """
    Base exception class for all PyJoyUI-specific errors.

    Provides structured error information including severity, error codes,
    and additional context data.
    """

    def __init__(self,
                 message: str,
                 error_code: Optional[str] = None,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        """
        Initialize PyJoyUI error.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier
            severity: Error severity level
            context: Additional context information
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.severity = severity
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"{self.error_code}: {self.message}"]

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"Context: {context_str}")

        if self.cause:
            parts.append(f"Caused by: {self.cause}")

        return " | ".join(parts)


def _merge_context(kwargs: Dict[str, Any], **items: Any) -> Dict[str, Any]:
    """Add identifying fields to the ``context`` keyword of an error."""
    context = dict(kwargs.get('context') or {})
    context.update({key: value for key, value in items.items() if value is not None})
    kwargs['context'] = context
    return kwargs


# Configuration errors
class ConfigurationError(PyJoyUIError):
    """Raised when configuration or content files cannot be used."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(message, **_merge_context(kwargs, config_key=config_key))


# UI errors
class UIError(PyJoyUIError):
    """Base class for UI manager errors."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('severity', ErrorSeverity.LOW)
        super().__init__(message, **kwargs)


class NotInstantiatedError(UIError):
    """Raised when an operation is invoked before the UI manager exists."""

    def __init__(self, operation: str, **kwargs):
        super().__init__(f"UI Manager is not instantiated! Could not {operation}",
                         **_merge_context(kwargs, operation=operation))


class ElementNotFoundError(UIError):
    """Raised when an identity is neither registered nor resolvable."""

    def __init__(self, identity: str, kind: str = "element", **kwargs):
        super().__init__(f"No {kind} found for identity '{identity}'",
                         **_merge_context(kwargs, identity=identity, kind=kind))


class InstantiationError(UIError):
    """Raised when a declared location fails to produce an element."""

    def __init__(self, identity: str, location: str, **kwargs):
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        super().__init__(f"Could not instantiate '{identity}' from '{location}'",
                         **_merge_context(kwargs, identity=identity, location=location))


class EmptyHistoryError(UIError):
    """Raised when going back or forward with nothing to replay."""

    def __init__(self, direction: str, **kwargs):
        super().__init__(f"No page to go {direction} to", **_merge_context(kwargs, direction=direction))


class TransitionError(UIError):
    """Raised when a transition update or completion callback fails."""

    def __init__(self, identity: str, **kwargs):
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        super().__init__(f"Transition of '{identity}' failed and was released",
                         **_merge_context(kwargs, identity=identity))


class ErrorHandler:
    """
    Centralized error handling and reporting system.

    Provides utilities for error logging, crash reporting, and recovery.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._error_callbacks: List[Callable[[Exception, Dict[str, Any]], None]] = []
        self._crash_handlers: List[Callable[[Exception], None]] = []

    def handle_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Handle an error with appropriate logging and recovery actions.

        In strict mode, PyJoyUI errors are raised after being logged.

        Args:
            error: The exception to handle
            context: Additional context information
        """
        # Import here to avoid circular imports
        from .logging import get_logger

        logger = get_logger("error_handler")

        error_context: Dict[str, Any] = {
            "error_type": type(error).__name__,
            "error_message": str(error),
        }

        if error.__traceback__ is not None:
            error_context["traceback"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )

        if context:
            error_context.update(context)

        if isinstance(error, PyJoyUIError):
            error_context.update({
                "error_code": error.error_code,
                "severity": error.severity.value,
                "pyjoyui_context": error.context,
            })

            if error.severity in (ErrorSeverity.CRITICAL, ErrorSeverity.HIGH):
                logger.error(error.message, extra=error_context)
            else:
                logger.warning(error.message, extra=error_context)
        else:
            logger.error("Unexpected error occurred", extra=error_context)

        for callback in self._error_callbacks:
            try:
                callback(error, error_context)
            except Exception as callback_error:
                logger.error(f"Error in error callback: {callback_error}")

        if self.strict and isinstance(error, PyJoyUIError):
            raise error

    def handle_crash(self, error: Exception) -> None:
        """
        Handle a critical error that might cause the application to crash.

        Args:
            error: The critical exception
        """
        from .logging import get_logger

        logger = get_logger("crash_handler")
        logger.critical("Critical error - application may crash", extra={
            "error_type": type(error).__name__,
            "error_message": str(error),
            "traceback": "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
        })

        for handler in self._crash_handlers:
            try:
                handler(error)
            except Exception as handler_error:
                logger.critical(f"Error in crash handler: {handler_error}")

    def register_error_callback(self, callback: Callable[[Exception, Dict[str, Any]], None]) -> None:
        """Register a callback to be called when errors occur."""
        self._error_callbacks.append(callback)

    def remove_error_callback(self, callback: Callable[[Exception, Dict[str, Any]], None]) -> None:
        """Remove a previously registered error callback."""
        if callback in self._error_callbacks:
            self._error_callbacks.remove(callback)

    def register_crash_handler(self, handler: Callable[[Exception], None]) -> None:
        """Register a handler to be called during critical errors."""
        self._crash_handlers.append(handler)

    def setup_global_exception_handler(self) -> None:
        """Set up global exception handler for unhandled exceptions."""
        def exception_handler(exc_type: Type[BaseException],
                            exc_value: BaseException,
                            exc_traceback) -> None:
            """Global exception handler."""
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return

            self.handle_crash(exc_value)
            sys.__excepthook__(exc_type, exc_value, exc_traceback)

        sys.excepthook = exception_handler


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def reset_error_handler() -> None:
    """Reset the global error handler instance."""
    global _error_handler
    _error_handler = None


def handle_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Handle an error using the global error handler.

    Args:
        error: The exception to handle
        context: Additional context information
    """
    get_error_handler().handle_error(error, context)


def handle_crash(error: Exception) -> None:
    """
    Handle a critical error using the global error handler.

    Args:
        error: The critical exception
    """
    get_error_handler().handle_crash(error)


def setup_exception_handling() -> None:
    """Set up global exception handling."""
    get_error_handler().setup_global_exception_handler()
