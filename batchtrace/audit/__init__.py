"""Audit trail: append-only, hash-chained log of registry events."""

from batchtrace.audit.models import AuditEvent, AuditEventKind, AuditOutcome
from batchtrace.audit.store import AuditLog, AuditSubscriber
from batchtrace.audit.stores import InMemoryAuditLog

__all__ = [
    "AuditEvent",
    "AuditEventKind",
    "AuditLog",
    "AuditOutcome",
    "AuditSubscriber",
    "InMemoryAuditLog",
]
