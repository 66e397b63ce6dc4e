"""TransferRelation model - one directed edge of the relation graph."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .base import TransferDirection, TransferType


class TransferRelation(BaseModel):
    """Directed, typed, weighted edge between two language objects.

    Asserts that mastering ``source_id`` partially transfers to
    ``target_id``. Relations are materialized elsewhere and treated as
    a read-only snapshot during propagation.

    Attributes:
        source_id: Object the transfer starts from.
        target_id: Object receiving the transfer.
        transfer_type: Linguistic relationship kind.
        strength: Transfer strength (0.0-1.0).
        confidence: Confidence in the relationship itself (0.0-1.0).
        direction: Direction the relationship was discovered in.
        mediating_feature: Linguistic feature carrying the transfer, if known.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_id: str = Field(min_length=1, description="Source object ID")
    target_id: str = Field(min_length=1, description="Target object ID")
    transfer_type: TransferType = Field(description="Relationship kind")
    strength: float = Field(ge=0.0, le=1.0, description="Transfer strength")
    confidence: float = Field(ge=0.0, le=1.0, description="Relationship confidence")
    direction: TransferDirection = Field(
        default=TransferDirection.FORWARD,
        description="Direction the relationship was discovered in",
    )
    mediating_feature: str | None = Field(
        default=None,
        description="Shared affix, sound or pattern behind the transfer",
    )
