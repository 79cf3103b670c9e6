"""
Offline API Client

Stand-in for the remote results/leaderboard API. Every request resolves
immediately with the same "offline" answer, so callers must always be ready
to fall back to local data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

OFFLINE_STATUS = 503
OFFLINE_BODY: Dict[str, Any] = {"message": "Offline mode"}


@dataclass
class ApiResponse:
    status: int
    body: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class OfflineApiClient:
    """API client whose every call answers 503 "Offline mode"."""

    def __init__(self, base_url: str = "") -> None:
        self.base_url = base_url

    async def request(
        self,
        method: str,
        path: str,
        *,
        query: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        logger.debug("Offline API request %s %s", method, path)
        return ApiResponse(status=OFFLINE_STATUS, body=dict(OFFLINE_BODY))

    async def get_leaderboard_rank(self, mode: str, mode2: str, language: str) -> ApiResponse:
        return await self.request(
            "GET",
            "/leaderboards/rank",
            query={"mode": mode, "mode2": mode2, "language": language},
        )


__all__ = ["ApiResponse", "OFFLINE_BODY", "OFFLINE_STATUS", "OfflineApiClient"]
