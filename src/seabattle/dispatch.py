"""Publishes the domain events a match has recorded to subscribed handlers."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Iterable

from seabattle.engine.events import DomainEvent
from seabattle.engine.match import Match
from seabattle.telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.dispatch")

EventHandler = Callable[[DomainEvent], None]


class DomainEventDispatcher:
    """Routes events to handlers registered for their type or any base type.

    Handlers run synchronously in subscription order. A failing handler stops
    the batch and its exception propagates to the caller; events already
    drained from the match are not put back.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def dispatch(self, match: Match) -> list[DomainEvent]:
        """Drain ``match``'s pending events and publish each one."""
        events = match.drain_domain_events()
        logger.info(
            "dispatching_domain_events",
            extra={"match_id": str(match.id), "event_count": len(events)},
        )
        with tracer.start_as_current_span("dispatch.domain_events") as span:
            span.set_attribute("match.id", str(match.id))
            span.set_attribute("event_count", len(events))
            self.publish_all(events)
        return events

    def dispatch_all(self, matches: Iterable[Match]) -> list[DomainEvent]:
        published: list[DomainEvent] = []
        for match in matches:
            published.extend(self.dispatch(match))
        return published

    def publish_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    def publish(self, event: DomainEvent) -> None:
        for handler in self._handlers_for(event):
            logger.debug(
                "publishing_domain_event",
                extra={"event_type": event.event_type, "match_id": str(event.match_id)},
            )
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "domain_event_publish_failed",
                    extra={"event_type": event.event_type, "match_id": str(event.match_id)},
                )
                raise

    def _handlers_for(self, event: DomainEvent) -> list[EventHandler]:
        handlers: list[EventHandler] = []
        for event_type in type(event).__mro__:
            handlers.extend(self._handlers.get(event_type, ()))
        return handlers
