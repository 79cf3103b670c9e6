"""
Remote Configuration Gate

The snapshot store waits on the server configuration once before it loads
anything. This deployment has no server, so the gate is already settled.
"""

import asyncio
from typing import Protocol


class ConfigurationGate(Protocol):
    """Anything the store can wait on before establishing the snapshot."""

    async def wait_ready(self) -> bool:
        ...


class OfflineConfiguration:
    """Configuration gate used when running without a server."""

    def __init__(self) -> None:
        self._ready = asyncio.Event()
        self._ready.set()

    async def wait_ready(self) -> bool:
        """Wait until the configuration has settled."""
        await self._ready.wait()
        return True


__all__ = ["ConfigurationGate", "OfflineConfiguration"]
