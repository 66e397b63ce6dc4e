"""ObjectUpdateEvent model - the ground-truth learning signal."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .base import ComponentType, MasteryStage, UpdateType, utc_now


class ObjectUpdateEvent(BaseModel):
    """A direct learning update for one language object.

    Produced by response scoring after each learner interaction and
    consumed once by propagation. Immutable.

    Attributes:
        source_object_id: Object that was directly updated.
        update_type: Kind of interaction that produced the update.
        previous_stage: Mastery stage before the interaction.
        new_stage: Mastery stage after the interaction.
        accuracy: Accuracy of the response (0.0-1.0).
        response_time_ms: Response latency in milliseconds.
        component: Language component of the source object.
        timestamp: When the interaction happened.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_object_id: str = Field(min_length=1, description="Directly updated object")
    update_type: UpdateType = Field(description="Kind of interaction")
    previous_stage: MasteryStage = Field(description="Stage before the interaction")
    new_stage: MasteryStage = Field(description="Stage after the interaction")
    accuracy: float = Field(ge=0.0, le=1.0, description="Response accuracy 0.0-1.0")
    response_time_ms: float = Field(gt=0, description="Response latency in milliseconds")
    component: ComponentType = Field(description="Language component")
    timestamp: datetime = Field(default_factory=utc_now, description="When it happened")

    @property
    def stage_change(self) -> int:
        """Signed stage delta (positive = advanced)."""
        return int(self.new_stage) - int(self.previous_stage)

    @property
    def advanced(self) -> bool:
        """Whether the event moved the object to a higher stage."""
        return self.stage_change > 0
