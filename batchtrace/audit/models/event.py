"""AuditEvent model for audit domain."""

import hashlib
import json
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from batchtrace.primitives import utc_now

GENESIS_HASH = "0" * 64


class AuditEventKind(str, Enum):
    """Kinds of state change (or lookup) the audit log records."""

    REGISTERED = "Registered"
    STATUS_CHANGED = "StatusChanged"
    VERIFIED = "Verified"
    MANUFACTURER_GRANTED = "ManufacturerGranted"
    MANUFACTURER_REVOKED = "ManufacturerRevoked"
    ADMIN_TRANSFERRED = "AdminTransferred"


class AuditOutcome(str, Enum):
    """Result recorded with an event.

    Failed calls never reach the log, so mutating events are always
    SUCCESS; verification lookups record whether the batch was valid.
    """

    SUCCESS = "success"
    VALID = "valid"
    INVALID = "invalid"


def compute_event_hash(
    sequence: int,
    kind: AuditEventKind,
    product_id: str | None,
    actor: str,
    outcome: AuditOutcome,
    payload: Mapping[str, Any],
    timestamp: datetime,
    previous_hash: str,
) -> str:
    """Hash an event's content together with its predecessor's hash."""
    content = {
        "sequence": sequence,
        "kind": kind.value,
        "product_id": product_id,
        "actor": actor,
        "outcome": outcome.value,
        "payload": dict(payload),
        "timestamp": timestamp.isoformat(),
        "previous_hash": previous_hash,
    }
    canonical = json.dumps(content, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class AuditEvent(BaseModel):
    """Immutable record of one completed registry operation.

    The payload keeps the externally visible field order of each kind:
    Registered{product_id, owner}, StatusChanged{product_id, active},
    Verified{product_id, valid, verifier}.
    """

    model_config = ConfigDict(frozen=True)

    sequence: int = Field(..., ge=1, description="Position in the log, starting at 1")
    kind: AuditEventKind = Field(..., description="Event classification")
    product_id: str | None = Field(
        default=None, description="Subject batch code, None for role events"
    )
    actor: str = Field(..., description="Identity that performed the call")
    outcome: AuditOutcome = Field(
        default=AuditOutcome.SUCCESS, description="Call outcome"
    )
    payload: Mapping[str, Any] = Field(..., description="Event fields, read-only")
    timestamp: datetime = Field(
        default_factory=utc_now, description="Event time"
    )
    previous_hash: str = Field(
        default=GENESIS_HASH, description="Hash of the preceding event"
    )
    hash: str = Field(..., description="Hash of this event chained to previous_hash")

    @field_validator("payload", mode="after")
    @classmethod
    def _freeze_payload(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        # Private copy behind a read-only view; insertion order is kept
        return MappingProxyType(dict(value))

    @field_serializer("payload")
    def _serialize_payload(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)

    def expected_hash(self) -> str:
        """Recompute this event's hash from its content."""
        return compute_event_hash(
            self.sequence,
            self.kind,
            self.product_id,
            self.actor,
            self.outcome,
            self.payload,
            self.timestamp,
            self.previous_hash,
        )
