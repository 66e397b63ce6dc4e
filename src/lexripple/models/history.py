"""UpdateHistoryEntry model - audit record of one applied update."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .base import TransferType, utc_now


class UpdateHistoryEntry(BaseModel):
    """Append-only audit record of an indirect update.

    Attributes:
        timestamp: When the update was recorded.
        source_object_id: Object (or aggregate label) that caused it.
        target_object_id: Object that was adjusted.
        magnitude: Magnitude applied.
        relationship_type: Relationship the influence travelled along.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: datetime = Field(default_factory=utc_now, description="When recorded")
    source_object_id: str = Field(description="Triggering object")
    target_object_id: str = Field(description="Adjusted object")
    magnitude: float = Field(ge=0.0, le=1.0, description="Magnitude applied")
    relationship_type: TransferType = Field(description="Relationship kind")
