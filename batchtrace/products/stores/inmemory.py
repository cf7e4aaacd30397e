"""In-memory implementation of ProductStore."""

from batchtrace.products.models import ProductRecord
from batchtrace.products.store import ProductStore


class InMemoryProductStore(ProductStore):
    """In-memory implementation of ProductStore for testing and development.

    Uses a dict keyed by product_id; insertion order doubles as
    registration order.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._records: dict[str, ProductRecord] = {}

    async def get(self, product_id: str) -> ProductRecord | None:
        """Get a record by product ID, None if never registered."""
        return self._records.get(product_id)

    async def insert_if_absent(self, record: ProductRecord) -> bool:
        """Atomically insert a new record."""
        # setdefault is a single dict operation, so no await point splits
        # the presence check from the write
        stored = self._records.setdefault(record.product_id, record)
        return stored is record

    async def replace(self, record: ProductRecord) -> None:
        """Replace an existing record."""
        if record.product_id not in self._records:
            raise KeyError(record.product_id)
        self._records[record.product_id] = record

    async def list_records(
        self,
        *,
        owner: str | None = None,
        active: bool | None = None,
    ) -> list[ProductRecord]:
        """List records in registration order with optional filters."""
        results = []
        for record in self._records.values():
            if owner is not None and record.owner != owner:
                continue
            if active is not None and record.active != active:
                continue
            results.append(record)
        return results
