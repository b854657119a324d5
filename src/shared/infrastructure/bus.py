"""In-memory event bus implementation."""

from __future__ import annotations

from typing import Dict, List, Type

import structlog

from shared.domain.events import DomainEvent, IEventHandler

logger = structlog.get_logger(__name__)


class InMemoryEventBus:
    """In-process event bus dispatching on the exact event class.

    Handlers run synchronously; an exception raised by a handler
    propagates to the publisher.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.get(event_class, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event_class: Type[DomainEvent]) -> List[IEventHandler]:
        return list(self._handlers.get(event_class, []))

    def publish(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(type(event))
        logger.debug(
            "event_bus.publish",
            event_name=event.event_name,
            aggregate_id=event.aggregate_id,
            handler_count=len(handlers),
        )
        for handler in handlers:
            handler.handle(event)


event_bus = InMemoryEventBus()
