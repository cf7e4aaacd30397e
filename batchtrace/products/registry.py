"""ProductRegistry: registration, status changes and public verification.

Every write runs under the AccessControlManager's write lock, spanning
the capability check, the record read-check-write and the audit append.
Reads take no lock; records are immutable, so a reader sees either the
old or the new version of a record, never a mix.
"""

import time

from pydantic import ValidationError

from batchtrace.access import AccessControlManager, Capability
from batchtrace.audit import AuditEventKind, AuditLog, AuditOutcome
from batchtrace.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    RegistryError,
)
from batchtrace.observability.logging import get_logger
from batchtrace.observability.metrics import VERIFICATIONS, metrics_enabled, record_operation
from batchtrace.primitives import ZERO_IDENTITY, Clock, unix_now
from batchtrace.products.models import ProductRecord, VerificationResult
from batchtrace.products.store import ProductStore
from batchtrace.products.stores import InMemoryProductStore

logger = get_logger(__name__)


class ProductRegistry:
    """Owns product records and their lifecycle.

    NONEXISTENT --register--> ACTIVE <--status--> INACTIVE. No transition
    leads back to NONEXISTENT.
    """

    def __init__(
        self,
        access: AccessControlManager,
        audit_log: AuditLog,
        store: ProductStore | None = None,
        *,
        clock: Clock | None = None,
        emit_verification_events: bool = False,
    ) -> None:
        self._access = access
        self._audit_log = audit_log
        self._store = store or InMemoryProductStore()
        self._clock = clock or unix_now
        self._emit_verification_events = emit_verification_events

    async def register_product(
        self,
        caller: str,
        product_id: str,
        product_name: str,
        off_chain_reference: str,
        quality_info: str,
    ) -> None:
        """Register a new batch owned by caller.

        The record starts active with created_at taken from the clock.

        Raises:
            UnauthorizedError: If caller does not hold manufacturer
            InvalidInputError: If product_id is empty or a field is not a string
            ConflictError: If product_id is already registered
        """
        started = time.perf_counter()
        try:
            async with self._access.write_lock:
                await self._access.require(caller, Capability.MANUFACTURER, "register_product")
                if not isinstance(product_id, str) or not product_id:
                    raise InvalidInputError("product_id must be a non-empty string")
                if await self._store.get(product_id) is not None:
                    raise ConflictError(f"product {product_id} is already registered")

                try:
                    record = ProductRecord(
                        product_id=product_id,
                        product_name=product_name,
                        quality_info=quality_info,
                        off_chain_reference=off_chain_reference,
                        active=True,
                        created_at=self._clock(),
                        owner=caller,
                    )
                except ValidationError as e:
                    raise InvalidInputError(
                        f"invalid product fields ({e.error_count()} error(s))"
                    ) from e
                if not await self._store.insert_if_absent(record):
                    raise ConflictError(f"product {product_id} is already registered")

                await self._audit_log.append(
                    AuditEventKind.REGISTERED,
                    caller,
                    {"product_id": product_id, "owner": caller},
                    product_id=product_id,
                )
        except RegistryError as e:
            self._rejected("register_product", caller, product_id, e)
            raise

        record_operation("register_product", "success", time.perf_counter() - started)
        logger.info(
            "product_registered",
            product_id=product_id,
            owner=caller,
            off_chain_reference=off_chain_reference,
        )

    async def update_product_status(self, caller: str, product_id: str, active: bool) -> None:
        """Enable or disable a batch. Only its owner may do this.

        The owner must still hold manufacturer: revoking the capability
        also freezes the status of records they registered earlier.
        Setting the current value again succeeds and is still audited.

        Raises:
            UnauthorizedError: If caller does not hold manufacturer
            InvalidInputError: If active is not a bool
            NotFoundError: If product_id was never registered
            ForbiddenError: If caller is not the record's owner
        """
        started = time.perf_counter()
        try:
            async with self._access.write_lock:
                await self._access.require(
                    caller, Capability.MANUFACTURER, "update_product_status"
                )
                if not isinstance(active, bool):
                    raise InvalidInputError("active must be a boolean")
                record = await self._store.get(product_id)
                if record is None:
                    raise NotFoundError(f"product {product_id} is not registered")
                if record.owner != caller:
                    raise ForbiddenError(f"{caller} does not own product {product_id}")

                await self._store.replace(record.model_copy(update={"active": active}))
                await self._audit_log.append(
                    AuditEventKind.STATUS_CHANGED,
                    caller,
                    {"product_id": product_id, "active": active},
                    product_id=product_id,
                )
        except RegistryError as e:
            self._rejected("update_product_status", caller, product_id, e)
            raise

        record_operation("update_product_status", "success", time.perf_counter() - started)
        logger.info(
            "product_status_changed",
            product_id=product_id,
            owner=caller,
            active=active,
            previous_active=record.active,
        )

    async def verify_product(
        self, product_id: str, verifier: str | None = None
    ) -> VerificationResult:
        """Look up a batch code. Public; never raises for unknown codes.

        Inactive and unknown batches both answer valid=False with zero
        fields. When verification events are enabled a Verified event is
        appended, with verifier defaulting to the zero identity.
        """
        record = await self._store.get(product_id)
        result = VerificationResult.from_record(record)

        if metrics_enabled():
            VERIFICATIONS.labels(valid=str(result.valid).lower()).inc()
        logger.debug("product_verified", product_id=product_id, valid=result.valid)

        if self._emit_verification_events:
            verifier = verifier or ZERO_IDENTITY
            async with self._access.write_lock:
                await self._audit_log.append(
                    AuditEventKind.VERIFIED,
                    verifier,
                    {"product_id": product_id, "valid": result.valid, "verifier": verifier},
                    product_id=product_id,
                    outcome=AuditOutcome.VALID if result.valid else AuditOutcome.INVALID,
                )

        return result

    async def get_product(self, product_id: str) -> ProductRecord | None:
        """Return the stored record, active or not, or None."""
        return await self._store.get(product_id)

    async def list_products(
        self,
        *,
        owner: str | None = None,
        active: bool | None = None,
    ) -> list[ProductRecord]:
        """List records in registration order."""
        return await self._store.list_records(owner=owner, active=active)

    def _rejected(
        self, operation: str, caller: str, product_id: str, error: RegistryError
    ) -> None:
        record_operation(operation, error.error_code.value.lower())
        logger.warning(
            f"{operation}_rejected",
            caller=caller,
            product_id=product_id,
            error_code=error.error_code.value,
            reason=error.message,
        )
