"""Runtime configuration for typecore."""

from typecore.config.settings import (
    STORAGE_KEY,
    STORAGE_VERSION,
    StorageSettings,
    TypeCoreSettings,
    load_settings,
)

__all__ = ["STORAGE_KEY", "STORAGE_VERSION", "StorageSettings", "TypeCoreSettings", "load_settings"]
