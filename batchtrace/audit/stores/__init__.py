"""Audit log implementations."""

from batchtrace.audit.stores.inmemory import InMemoryAuditLog

__all__ = ["InMemoryAuditLog"]
