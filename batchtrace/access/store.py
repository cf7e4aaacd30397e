"""RoleStore abstract interface."""

from abc import ABC, abstractmethod


class RoleStore(ABC):
    """Abstract interface for capability assignment storage.

    Holds the single admin identity and the manufacturer set.
    """

    @abstractmethod
    async def get_admin(self) -> str | None:
        """Get the current admin identity, None before setup."""
        pass

    @abstractmethod
    async def set_admin(self, identity: str) -> None:
        """Replace the admin identity."""
        pass

    @abstractmethod
    async def is_manufacturer(self, identity: str) -> bool:
        """Check manufacturer membership."""
        pass

    @abstractmethod
    async def add_manufacturer(self, identity: str) -> bool:
        """Add to the manufacturer set; False if already present."""
        pass

    @abstractmethod
    async def remove_manufacturer(self, identity: str) -> bool:
        """Remove from the manufacturer set; False if absent."""
        pass

    @abstractmethod
    async def list_manufacturers(self) -> list[str]:
        """List manufacturer identities in sorted order."""
        pass
