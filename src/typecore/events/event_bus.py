"""Event bus coordinating snapshot-change notifications."""

from __future__ import annotations

import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Optional, Union

from typecore.exceptions import EventBusError

from .event import Event
from .event_context import EventContext

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Union[Any, Awaitable[Any]]]


class EventBus:
    """Publish-subscribe channel between the store and its observers.

    Handlers may be plain or ``async`` callables taking the event. A failing
    handler is logged and recorded on the returned context; it never affects
    the publisher or the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Event], list[tuple[str, Handler]]] = {}

    def subscribe(
        self,
        event_type: type[Event],
        handler: Handler,
        name: Optional[str] = None,
    ) -> str:
        """Register ``handler`` for ``event_type`` and its subclasses.

        Args:
            event_type: Event class to listen for.
            handler: Callable invoked with the event.
            name: Optional label; defaults to the callable's name.

        Returns:
            The handler name, usable with :meth:`unsubscribe`.

        Raises:
            EventBusError: If ``event_type`` is not an :class:`Event` subclass.
        """

        if not (isinstance(event_type, type) and issubclass(event_type, Event)):
            raise EventBusError(f"Event type must derive from Event, got {event_type!r}")

        handler_name = name or getattr(handler, "__name__", repr(handler))
        self._handlers.setdefault(event_type, []).append((handler_name, handler))
        logger.debug("Subscribed %s to %s", handler_name, event_type.__name__)
        return handler_name

    def unsubscribe(self, handler_name: str) -> None:
        """Remove every registration made under ``handler_name``."""

        for event_type in list(self._handlers):
            remaining = [entry for entry in self._handlers[event_type] if entry[0] != handler_name]
            if remaining:
                self._handlers[event_type] = remaining
            else:
                del self._handlers[event_type]
        logger.debug("Unsubscribed %s", handler_name)

    def handlers_for(self, event: Event) -> list[tuple[str, Handler]]:
        """Return registrations matching the event's type, in subscription order."""

        matched: list[tuple[str, Handler]] = []
        for registered_type, entries in self._handlers.items():
            if isinstance(event, registered_type):
                matched.extend(entries)
        return matched

    async def publish(self, event: Event) -> EventContext:
        """Publish an event to all matching handlers.

        Args:
            event: Event to dispatch.

        Returns:
            Context populated with per-handler results and errors.

        Raises:
            EventBusError: If ``event`` is not an :class:`Event`.
        """

        if not isinstance(event, Event):
            raise EventBusError(f"Can only publish Event objects, got {type(event)}")

        context = EventContext(event)
        handlers = self.handlers_for(event)
        if not handlers:
            logger.debug("No handlers registered for event type %s", type(event).__name__)
            return context

        for handler_name, handler in handlers:
            start_time = time.time()
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    result = await result
                context.add_result(handler_name, result)
            except Exception as error:
                logger.error(
                    "Error in handler %s for event %s: %s",
                    handler_name,
                    event.id,
                    error,
                    exc_info=True,
                )
                context.add_error(handler_name, error)
            finally:
                context.record_execution_time(handler_name, time.time() - start_time)

        return context


__all__ = ["EventBus", "Handler"]
