"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory"]


class StorageConfig(BaseModel):
    """Backend selection for the role, product and audit stores."""

    backend: BackendType = Field(
        default="inmemory",
        description="Backend type",
    )
