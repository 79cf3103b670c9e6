"""Collaborators the core talks to at their interface only."""

from typecore.integration.funbox import FunboxMetadata, get_funbox, get_funboxes
from typecore.integration.offline_api import ApiResponse, OfflineApiClient
from typecore.integration.remote_config import ConfigurationGate, OfflineConfiguration

__all__ = [
    "ApiResponse",
    "ConfigurationGate",
    "FunboxMetadata",
    "OfflineApiClient",
    "OfflineConfiguration",
    "get_funbox",
    "get_funboxes",
]
