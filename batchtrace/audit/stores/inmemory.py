"""In-memory implementation of AuditLog."""

from collections.abc import Callable
from typing import Any

from batchtrace.audit.models import (
    GENESIS_HASH,
    AuditEvent,
    AuditEventKind,
    AuditOutcome,
    compute_event_hash,
)
from batchtrace.audit.store import AuditLog, AuditSubscriber
from batchtrace.observability.logging import get_logger
from batchtrace.observability.metrics import AUDIT_EVENTS, metrics_enabled
from batchtrace.primitives import utc_now

logger = get_logger(__name__)


class InMemoryAuditLog(AuditLog):
    """In-memory implementation of AuditLog for testing and development.

    Events live in a list indexed by sequence - 1. Appends are expected
    to be serialized by the caller's write lock.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._events: list[AuditEvent] = []
        self._subscribers: list[AuditSubscriber] = []

    async def append(
        self,
        kind: AuditEventKind,
        actor: str,
        payload: dict[str, Any],
        *,
        product_id: str | None = None,
        outcome: AuditOutcome = AuditOutcome.SUCCESS,
    ) -> AuditEvent:
        """Append an event and notify subscribers."""
        sequence = len(self._events) + 1
        previous_hash = self._events[-1].hash if self._events else GENESIS_HASH
        timestamp = utc_now()
        payload = dict(payload)

        event = AuditEvent(
            sequence=sequence,
            kind=kind,
            product_id=product_id,
            actor=actor,
            outcome=outcome,
            payload=payload,
            timestamp=timestamp,
            previous_hash=previous_hash,
            hash=compute_event_hash(
                sequence, kind, product_id, actor, outcome,
                payload, timestamp, previous_hash,
            ),
        )
        self._events.append(event)

        if metrics_enabled():
            AUDIT_EVENTS.labels(kind=kind.value).inc()
        logger.debug(
            "audit_event_appended",
            sequence=sequence,
            kind=kind.value,
            product_id=product_id,
        )

        self._notify(event)
        return event

    def _notify(self, event: AuditEvent) -> None:
        # Snapshot so a callback may unsubscribe itself
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                logger.warning(
                    "audit_subscriber_failed",
                    sequence=event.sequence,
                    error=str(e),
                    error_type=type(e).__name__,
                )

    async def get_event(self, sequence: int) -> AuditEvent | None:
        """Get an event by its sequence number."""
        if 1 <= sequence <= len(self._events):
            return self._events[sequence - 1]
        return None

    async def list_events(
        self,
        *,
        product_id: str | None = None,
        kind: AuditEventKind | None = None,
        after_sequence: int = 0,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """List events in append order with optional filters."""
        results: list[AuditEvent] = []
        if limit <= 0:
            return results
        for event in self._events[max(after_sequence, 0):]:
            if product_id is not None and event.product_id != product_id:
                continue
            if kind is not None and event.kind != kind:
                continue
            results.append(event)
            if len(results) >= limit:
                break
        return results

    async def count(self) -> int:
        """Return the number of appended events."""
        return len(self._events)

    async def verify_chain(self) -> bool:
        """Recompute the hash chain and report whether it is intact."""
        previous_hash = GENESIS_HASH
        for index, event in enumerate(self._events, start=1):
            if event.sequence != index or event.previous_hash != previous_hash:
                return False
            if event.hash != event.expected_hash():
                return False
            previous_hash = event.hash
        return True

    def subscribe(self, callback: AuditSubscriber) -> Callable[[], None]:
        """Register an observer; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
