"""
Core Exceptions for typecore.

This module defines the exception classes used throughout the local data core.
Most failures in the core degrade silently (persistence problems surface as
"no data", invalid targets as a ``False`` result), so the hierarchy is small:

- TypeCoreError: base class carrying an error code and debugging context
- SnapshotInitError: snapshot establishment failed
- StorageOperationError: a key-value backend operation failed
- ConfigurationError: settings could not be loaded or validated
- EventBusError: an event could not be published
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class TypeCoreError(Exception):
    """Base exception class for all typecore errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize a typecore error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information for debugging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

        logger.debug("TypeCoreError: %s", message, extra={
            "error_code": error_code,
            "context": context
        })


class SnapshotInitError(TypeCoreError):
    """
    Raised when the initial snapshot cannot be established.

    The store always installs a usable default snapshot before raising, so
    callers may continue in a degraded state.
    """

    def __init__(self, message: str, response_code: int):
        """
        Initialize a snapshot initialization error.

        Args:
            message: Description of the underlying failure
            response_code: Response-code-like integer for caller diagnostics
        """
        self.response_code = response_code
        super().__init__(
            message,
            error_code="SNAPSHOT_INIT_FAILED",
            context={"response_code": response_code}
        )


class StorageOperationError(TypeCoreError):
    """Raised by key-value backends when a read, write or delete fails."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        backend_type: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        self.backend_type = backend_type
        self.operation = operation
        if message is None:
            context: list[str] = []
            if backend_type:
                context.append(f"backend={backend_type}")
            if operation:
                context.append(f"operation={operation}")
            detail = f" ({', '.join(context)})" if context else ""
            message = f"Storage operation failed{detail}".strip()
        super().__init__(
            message,
            error_code="STORAGE_OPERATION_ERROR",
            context={"backend_type": backend_type, "operation": operation}
        )


class ConfigurationError(TypeCoreError):
    """Raised when configuration is missing, unreadable or invalid."""

    def __init__(self, message: str, config_path: Optional[str] = None):
        self.config_path = config_path
        super().__init__(
            message,
            error_code="CONFIGURATION_ERROR",
            context={"config_path": config_path}
        )


class EventBusError(TypeCoreError):
    """Raised when an event cannot be dispatched."""

    def __init__(self, message: str):
        super().__init__(message, error_code="EVENT_BUS_ERROR")


__all__ = [
    "ConfigurationError",
    "EventBusError",
    "SnapshotInitError",
    "StorageOperationError",
    "TypeCoreError",
]
