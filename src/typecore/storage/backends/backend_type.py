"""
Backend Type Enumeration

This module defines the enumeration of supported local key-value backends.
"""

from enum import Enum


class BackendType(str, Enum):
    """Supported local key-value backends."""

    MEMORY = "memory"  # In-memory storage (non-persistent)
    SQLITE = "sqlite"  # SQLite database file
    JSON = "json"      # Single JSON document on disk
