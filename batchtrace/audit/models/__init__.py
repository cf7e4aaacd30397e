"""Audit domain models."""

from batchtrace.audit.models.event import (
    GENESIS_HASH,
    AuditEvent,
    AuditEventKind,
    AuditOutcome,
    compute_event_hash,
)

__all__ = [
    "GENESIS_HASH",
    "AuditEvent",
    "AuditEventKind",
    "AuditOutcome",
    "compute_event_hash",
]
