"""Enums for access control domain."""

from enum import Enum


class Capability(str, Enum):
    """Named permission grantable to an identity.

    ADMIN is held by exactly one identity; MANUFACTURER by any number,
    granted and revoked by the admin.
    """

    ADMIN = "admin"
    MANUFACTURER = "manufacturer"
