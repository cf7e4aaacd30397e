"""AuditLog abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from batchtrace.audit.models import AuditEvent, AuditEventKind, AuditOutcome

AuditSubscriber = Callable[[AuditEvent], None]


class AuditLog(ABC):
    """Abstract interface for the append-only audit trail.

    Components append only after a successful state transition; events
    are never removed or reordered once appended.
    """

    @abstractmethod
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
        pass

    @abstractmethod
    async def get_event(self, sequence: int) -> AuditEvent | None:
        """Get an event by its sequence number."""
        pass

    @abstractmethod
    async def list_events(
        self,
        *,
        product_id: str | None = None,
        kind: AuditEventKind | None = None,
        after_sequence: int = 0,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """List events in append order with optional filters."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Return the number of appended events."""
        pass

    @abstractmethod
    async def verify_chain(self) -> bool:
        """Recompute the hash chain and report whether it is intact."""
        pass

    @abstractmethod
    def subscribe(self, callback: AuditSubscriber) -> Callable[[], None]:
        """Register an observer; returns a function that unsubscribes it."""
        pass
