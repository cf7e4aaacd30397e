"""Registry composition from configuration.

Builds the three collaborating components (access control, product
registry, audit log) on the storage backend named in settings.
"""

from dataclasses import dataclass

from batchtrace.access import AccessControlManager, InMemoryRoleStore, RoleStore
from batchtrace.audit import AuditLog, InMemoryAuditLog
from batchtrace.config import Settings, get_settings
from batchtrace.config.models.storage import StorageConfig
from batchtrace.observability.logging import get_logger, setup_logging
from batchtrace.observability.metrics import setup_metrics
from batchtrace.primitives import Clock
from batchtrace.products import InMemoryProductStore, ProductRegistry, ProductStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class Registry:
    """The composed registry components."""

    access: AccessControlManager
    products: ProductRegistry
    audit_log: AuditLog


def configure_observability(settings: Settings) -> None:
    """Apply logging and metrics settings process-wide."""
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )
    setup_metrics(enabled=settings.observability.metrics.enabled)


def create_stores(config: StorageConfig) -> tuple[RoleStore, ProductStore, AuditLog]:
    """Create store instances for the configured backend.

    Raises:
        ValueError: If backend type is not supported
    """
    backend = config.backend

    if backend == "inmemory":
        logger.info("creating_stores", backend="inmemory")
        return InMemoryRoleStore(), InMemoryProductStore(), InMemoryAuditLog()

    raise ValueError(f"Unsupported storage backend: {backend}")


async def create_registry(
    settings: Settings | None = None,
    *,
    admin: str | None = None,
    clock: Clock | None = None,
) -> Registry:
    """Create a registry and grant admin to the setup identity.

    Args:
        settings: Configuration; defaults to get_settings()
        admin: Setup identity; defaults to settings.registry.admin_identity
        clock: UNIX-seconds clock for created_at; defaults to wall time

    Raises:
        ValueError: If no admin identity is available
    """
    if settings is None:
        settings = get_settings()
    admin = admin or settings.registry.admin_identity
    if not admin:
        raise ValueError(
            "An admin identity is required. Pass admin= or set "
            "registry.admin_identity (BATCHTRACE_REGISTRY__ADMIN_IDENTITY)."
        )

    role_store, product_store, audit_log = create_stores(settings.storage)
    access = AccessControlManager(audit_log, role_store)
    await access.setup(admin)

    products = ProductRegistry(
        access,
        audit_log,
        product_store,
        clock=clock,
        emit_verification_events=settings.registry.emit_verification_events,
    )

    logger.info(
        "registry_created",
        app_name=settings.app_name,
        admin=admin,
        emit_verification_events=settings.registry.emit_verification_events,
    )
    return Registry(access=access, products=products, audit_log=audit_log)
