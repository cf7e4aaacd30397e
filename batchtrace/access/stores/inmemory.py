"""In-memory implementation of RoleStore."""

from batchtrace.access.store import RoleStore


class InMemoryRoleStore(RoleStore):
    """In-memory implementation of RoleStore for testing and development."""

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._admin: str | None = None
        self._manufacturers: set[str] = set()

    async def get_admin(self) -> str | None:
        """Get the current admin identity, None before setup."""
        return self._admin

    async def set_admin(self, identity: str) -> None:
        """Replace the admin identity."""
        self._admin = identity

    async def is_manufacturer(self, identity: str) -> bool:
        """Check manufacturer membership."""
        return identity in self._manufacturers

    async def add_manufacturer(self, identity: str) -> bool:
        """Add to the manufacturer set; False if already present."""
        if identity in self._manufacturers:
            return False
        self._manufacturers.add(identity)
        return True

    async def remove_manufacturer(self, identity: str) -> bool:
        """Remove from the manufacturer set; False if absent."""
        if identity not in self._manufacturers:
            return False
        self._manufacturers.discard(identity)
        return True

    async def list_manufacturers(self) -> list[str]:
        """List manufacturer identities in sorted order."""
        return sorted(self._manufacturers)
