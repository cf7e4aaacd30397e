"""ProductStore abstract interface."""

from abc import ABC, abstractmethod

from batchtrace.products.models import ProductRecord


class ProductStore(ABC):
    """Abstract interface for product record storage.

    There is no delete: a product_id maps to at most one record for the
    lifetime of the store.
    """

    @abstractmethod
    async def get(self, product_id: str) -> ProductRecord | None:
        """Get a record by product ID, None if never registered."""
        pass

    @abstractmethod
    async def insert_if_absent(self, record: ProductRecord) -> bool:
        """Atomically insert a new record.

        Returns False, leaving the existing record untouched, if the
        product_id is already present.
        """
        pass

    @abstractmethod
    async def replace(self, record: ProductRecord) -> None:
        """Replace an existing record.

        Raises:
            KeyError: If no record exists for record.product_id
        """
        pass

    @abstractmethod
    async def list_records(
        self,
        *,
        owner: str | None = None,
        active: bool | None = None,
    ) -> list[ProductRecord]:
        """List records in registration order with optional filters."""
        pass
