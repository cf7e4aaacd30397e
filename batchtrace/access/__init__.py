"""Access control: capability assignments gating registry writes."""

from batchtrace.access.enums import Capability
from batchtrace.access.manager import AccessControlManager
from batchtrace.access.store import RoleStore
from batchtrace.access.stores import InMemoryRoleStore

__all__ = [
    "AccessControlManager",
    "Capability",
    "InMemoryRoleStore",
    "RoleStore",
]
