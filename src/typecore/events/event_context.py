"""Context container shared across handler invocations."""

from __future__ import annotations

import time
from typing import Any

from .event import Event


class EventContext:
    """Outcome of one publish call.

    Attributes:
        event: The event being processed.
        results: Mapping between handler names and their returned results.
        errors: Sequence of tuples pairing handler names with raised exceptions.
        handler_execution_times: Execution duration recorded per handler.
    """

    def __init__(self, event: Event) -> None:
        self.event = event
        self.start_time = time.time()
        self.results: dict[str, Any] = {}
        self.errors: list[tuple[str, Exception]] = []
        self.handler_execution_times: dict[str, float] = {}

    def add_result(self, handler_name: str, result: Any) -> None:
        self.results[handler_name] = result

    def add_error(self, handler_name: str, error: Exception) -> None:
        self.errors.append((handler_name, error))

    def record_execution_time(self, handler_name: str, execution_time: float) -> None:
        self.handler_execution_times[handler_name] = execution_time

    @property
    def handled_by(self) -> list[str]:
        """Names of the handlers that ran, in dispatch order."""
        return list(self.handler_execution_times)

    @property
    def has_errors(self) -> bool:
        """Return whether any handler raised an exception."""

        return bool(self.errors)


__all__ = ["EventContext"]
