"""Batchtrace: product batch traceability registry.

Producers register product batches with metadata and a pointer to
off-chain certification data; consumers look up a batch code to
confirm authenticity and provenance.
"""

from batchtrace.access import AccessControlManager, Capability
from batchtrace.audit import AuditEvent, AuditEventKind, AuditLog, InMemoryAuditLog
from batchtrace.errors import (
    ConflictError,
    ErrorCode,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    RegistryError,
    UnauthorizedError,
)
from batchtrace.factory import Registry, configure_observability, create_registry
from batchtrace.products import ProductRecord, ProductRegistry, VerificationResult
from batchtrace.primitives import ZERO_IDENTITY

__all__ = [
    "AccessControlManager",
    "AuditEvent",
    "AuditEventKind",
    "AuditLog",
    "Capability",
    "ConflictError",
    "ErrorCode",
    "ForbiddenError",
    "InMemoryAuditLog",
    "InvalidInputError",
    "NotFoundError",
    "ProductRecord",
    "ProductRegistry",
    "Registry",
    "RegistryError",
    "UnauthorizedError",
    "VerificationResult",
    "ZERO_IDENTITY",
    "configure_observability",
    "create_registry",
]
