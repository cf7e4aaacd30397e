"""Registry behaviour configuration."""

from pydantic import BaseModel, Field, field_validator


class RegistryConfig(BaseModel):
    """Configuration for the product registry and its access control."""

    admin_identity: str | None = Field(
        default=None,
        description="Identity granted the admin capability at setup",
    )
    emit_verification_events: bool = Field(
        default=False,
        description="Append a Verified audit event on every verification lookup",
    )

    @field_validator("admin_identity")
    @classmethod
    def _admin_identity_not_blank(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("admin_identity must be non-empty when set")
        return value
