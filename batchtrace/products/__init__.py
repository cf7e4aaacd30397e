"""Product registry: batch records and their lifecycle."""

from batchtrace.products.models import ProductRecord, VerificationResult
from batchtrace.products.registry import ProductRegistry
from batchtrace.products.store import ProductStore
from batchtrace.products.stores import InMemoryProductStore

__all__ = [
    "InMemoryProductStore",
    "ProductRecord",
    "ProductRegistry",
    "ProductStore",
    "VerificationResult",
]
