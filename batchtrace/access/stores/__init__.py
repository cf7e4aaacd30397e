"""Role store implementations."""

from batchtrace.access.stores.inmemory import InMemoryRoleStore

__all__ = ["InMemoryRoleStore"]
