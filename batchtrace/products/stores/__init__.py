"""Product store implementations."""

from batchtrace.products.stores.inmemory import InMemoryProductStore

__all__ = ["InMemoryProductStore"]
