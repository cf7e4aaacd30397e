"""AccessControlManager: capability checks and role administration.

Capabilities are looked up in the RoleStore on every call; nothing is
cached, so a revocation takes effect for the very next operation.
"""

import asyncio
import time

from batchtrace.access.enums import Capability
from batchtrace.access.store import RoleStore
from batchtrace.access.stores import InMemoryRoleStore
from batchtrace.audit import AuditEventKind, AuditLog
from batchtrace.errors import ConflictError, InvalidInputError, RegistryError, UnauthorizedError
from batchtrace.observability.logging import get_logger
from batchtrace.observability.metrics import MANUFACTURERS, metrics_enabled, record_operation
from batchtrace.primitives import ZERO_IDENTITY

logger = get_logger(__name__)


class AccessControlManager:
    """Authorizes callers for the admin and manufacturer capabilities.

    Owns the write lock shared with the ProductRegistry: every mutating
    call on either component runs its check, write and audit append
    while holding it, so the audit order is the serialization order.
    """

    def __init__(
        self,
        audit_log: AuditLog,
        store: RoleStore | None = None,
    ) -> None:
        self._audit_log = audit_log
        self._store = store or InMemoryRoleStore()
        self.write_lock = asyncio.Lock()

    async def setup(self, admin: str) -> None:
        """Grant admin to the identity performing system setup.

        Can only happen once; later changes go through transfer_admin.

        Raises:
            InvalidInputError: If admin is empty
            ConflictError: If an admin has already been set up
        """
        if not admin:
            raise InvalidInputError("admin identity must be non-empty")

        async with self.write_lock:
            if await self._store.get_admin() is not None:
                raise ConflictError("admin capability already initialized")
            await self._store.set_admin(admin)
            await self._audit_log.append(
                AuditEventKind.ADMIN_TRANSFERRED,
                admin,
                {"previous_admin": ZERO_IDENTITY, "new_admin": admin},
            )

        logger.info("admin_initialized", admin=admin)

    async def has_capability(self, identity: str, capability: Capability | str) -> bool:
        """Check whether identity currently holds capability. No side effects."""
        try:
            capability = Capability(capability)
        except ValueError:
            return False

        if capability is Capability.ADMIN:
            admin = await self._store.get_admin()
            return admin is not None and identity == admin
        return await self._store.is_manufacturer(identity)

    async def require(self, caller: str, capability: Capability, operation: str) -> None:
        """Raise UnauthorizedError unless caller holds capability.

        Callers are expected to hold write_lock so the check and the
        write that follows see the same role assignment.
        """
        if not await self.has_capability(caller, capability):
            raise UnauthorizedError(
                f"{caller} lacks {capability.value} capability for {operation}",
                capability=capability.value,
            )

    async def get_admin(self) -> str | None:
        """Return the current admin identity."""
        return await self._store.get_admin()

    async def list_manufacturers(self) -> list[str]:
        """Return manufacturer identities in sorted order."""
        return await self._store.list_manufacturers()

    async def grant_manufacturer(self, caller: str, target: str) -> None:
        """Grant manufacturer to target. Idempotent.

        Raises:
            UnauthorizedError: If caller is not the admin
            InvalidInputError: If target is empty
        """
        started = time.perf_counter()
        try:
            async with self.write_lock:
                await self.require(caller, Capability.ADMIN, "grant_manufacturer")
                if not target:
                    raise InvalidInputError("target identity must be non-empty")

                added = await self._store.add_manufacturer(target)
                await self._audit_log.append(
                    AuditEventKind.MANUFACTURER_GRANTED,
                    caller,
                    {"account": target},
                )
                await self._refresh_gauge()
        except RegistryError as e:
            self._rejected("grant_manufacturer", caller, e, target=target)
            raise

        record_operation("grant_manufacturer", "success", time.perf_counter() - started)
        logger.info("manufacturer_granted", admin=caller, account=target, changed=added)

    async def revoke_manufacturer(self, caller: str, target: str) -> None:
        """Revoke manufacturer from target. Idempotent.

        Records already owned by target are kept, but target can no
        longer change their status.

        Raises:
            UnauthorizedError: If caller is not the admin
            InvalidInputError: If target is empty
        """
        started = time.perf_counter()
        try:
            async with self.write_lock:
                await self.require(caller, Capability.ADMIN, "revoke_manufacturer")
                if not target:
                    raise InvalidInputError("target identity must be non-empty")

                removed = await self._store.remove_manufacturer(target)
                await self._audit_log.append(
                    AuditEventKind.MANUFACTURER_REVOKED,
                    caller,
                    {"account": target},
                )
                await self._refresh_gauge()
        except RegistryError as e:
            self._rejected("revoke_manufacturer", caller, e, target=target)
            raise

        record_operation("revoke_manufacturer", "success", time.perf_counter() - started)
        logger.info("manufacturer_revoked", admin=caller, account=target, changed=removed)

    async def transfer_admin(self, caller: str, new_admin: str) -> None:
        """Move the admin capability from caller to new_admin.

        There is never more than one admin; the caller loses admin on
        success. Transferring to the current admin is a no-op success.

        Raises:
            UnauthorizedError: If caller is not the admin
            InvalidInputError: If new_admin is empty
        """
        started = time.perf_counter()
        try:
            async with self.write_lock:
                await self.require(caller, Capability.ADMIN, "transfer_admin")
                if not new_admin:
                    raise InvalidInputError("new admin identity must be non-empty")

                await self._store.set_admin(new_admin)
                await self._audit_log.append(
                    AuditEventKind.ADMIN_TRANSFERRED,
                    caller,
                    {"previous_admin": caller, "new_admin": new_admin},
                )
        except RegistryError as e:
            self._rejected("transfer_admin", caller, e, target=new_admin)
            raise

        record_operation("transfer_admin", "success", time.perf_counter() - started)
        logger.info("admin_transferred", previous_admin=caller, new_admin=new_admin)

    async def _refresh_gauge(self) -> None:
        if metrics_enabled():
            MANUFACTURERS.set(len(await self._store.list_manufacturers()))

    def _rejected(self, operation: str, caller: str, error: RegistryError, **context: str) -> None:
        record_operation(operation, error.error_code.value.lower())
        logger.warning(
            f"{operation}_rejected",
            caller=caller,
            error_code=error.error_code.value,
            reason=error.message,
            **context,
        )
