"""Product domain models."""

from pydantic import BaseModel, ConfigDict, Field

from batchtrace.primitives import ZERO_IDENTITY


class ProductRecord(BaseModel):
    """One registered product batch.

    Records are frozen; a status change stores a new copy rather than
    mutating the existing one, so concurrent readers never observe a
    partially written record. Presence in the store is what makes a
    record exist, never the value of created_at.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., min_length=1, description="Batch code")
    product_name: str = Field(..., description="Descriptive name")
    quality_info: str = Field(..., description="Quality grade or notes")
    off_chain_reference: str = Field(
        ..., description="Opaque pointer to external metadata"
    )
    active: bool = Field(default=True, description="Whether the batch verifies as valid")
    created_at: int = Field(..., ge=0, description="Registration time, UNIX seconds")
    owner: str = Field(..., description="Registering manufacturer")


class VerificationResult(BaseModel):
    """Public answer to a batch code lookup.

    Absent or inactive records yield valid=False with every other field
    at its zero value.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool = False
    product_name: str = ""
    quality_info: str = ""
    off_chain_reference: str = ""
    owner: str = ZERO_IDENTITY
    created_at: int = 0

    @classmethod
    def from_record(cls, record: ProductRecord | None) -> "VerificationResult":
        """Build the lookup answer for a record (or its absence)."""
        if record is None or not record.active:
            return cls()
        return cls(
            valid=True,
            product_name=record.product_name,
            quality_info=record.quality_info,
            off_chain_reference=record.off_chain_reference,
            owner=record.owner,
            created_at=record.created_at,
        )

    def as_tuple(self) -> tuple[bool, str, str, str, str, int]:
        """Return (valid, name, quality, reference, owner, created_at)."""
        return (
            self.valid,
            self.product_name,
            self.quality_info,
            self.off_chain_reference,
            self.owner,
            self.created_at,
        )
