"""IndirectUpdate and PropagationResult - transient propagation artifacts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .base import TransferType
from .event import ObjectUpdateEvent


class IndirectUpdate(BaseModel):
    """A secondary state adjustment for an object related to the source.

    Attributes:
        target_object_id: Object to adjust.
        source_object_id: Object whose event triggered the adjustment.
        relationship_type: Relationship the influence travelled along.
        magnitude: Strength of the influence (0.0-1.0).
        difficulty_adjustment: Difficulty delta (negative = easier).
        stability_boost: Stability increase in days.
        priority_adjustment: Priority delta (negative = less urgent).
        confidence: Confidence in the adjustment (0.0-1.0).
        depth: Hops from the source (1 = direct neighbour).
        reason: Human-readable explanation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_object_id: str = Field(description="Object to adjust")
    source_object_id: str = Field(description="Triggering object")
    relationship_type: TransferType = Field(description="Relationship kind")
    magnitude: float = Field(ge=0.0, le=1.0, description="Influence strength")
    difficulty_adjustment: float = Field(default=0.0, description="Difficulty delta")
    stability_boost: float = Field(default=0.0, ge=0.0, description="Stability boost in days")
    priority_adjustment: float = Field(default=0.0, ge=-1.0, le=1.0, description="Priority delta")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence in the adjustment")
    depth: int = Field(ge=1, description="Hops from the source object")
    reason: str = Field(default="", description="Human-readable explanation")


class PropagationResult(BaseModel):
    """Outcome of propagating one event through the relation graph.

    Attributes:
        source_event: Event that was propagated.
        indirect_updates: Updates produced, in discovery (BFS) order.
        total_affected: Number of objects that received an update.
        cumulative_magnitude: Sum of all update magnitudes.
        by_relation_type: Magnitude sum per relationship kind.
        processing_time_ms: Wall time spent propagating.
    """

    model_config = ConfigDict(extra="forbid")

    source_event: ObjectUpdateEvent
    indirect_updates: list[IndirectUpdate] = Field(default_factory=list)
    total_affected: int = Field(default=0, ge=0)
    cumulative_magnitude: float = Field(default=0.0, ge=0.0)
    by_relation_type: dict[TransferType, float] = Field(default_factory=dict)
    processing_time_ms: float = Field(default=0.0, ge=0.0)

    @classmethod
    def empty(
        cls, source_event: ObjectUpdateEvent, processing_time_ms: float = 0.0
    ) -> PropagationResult:
        """Result for a run that produced no updates."""
        return cls(source_event=source_event, processing_time_ms=processing_time_ms)

    @property
    def affected_object_ids(self) -> list[str]:
        """Target IDs in discovery order."""
        return [u.target_object_id for u in self.indirect_updates]
