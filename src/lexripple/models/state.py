"""ObjectPropagationState model - mutable per-object learning state."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import ComponentType, MasteryStage, clamp, utc_now

DIFFICULTY_MIN = -3.0
DIFFICULTY_MAX = 3.0
STABILITY_MIN = 0.0
STABILITY_MAX = 365.0
PRIORITY_MIN = 0.0
PRIORITY_MAX = 1.0


class ObjectPropagationState(BaseModel):
    """Current learning state of one language object.

    Bounded fields are clamped into range on construction and on every
    assignment, so the state can never hold an out-of-range value.

    Attributes:
        object_id: Object identifier.
        mastery_stage: Current mastery stage (0-4).
        difficulty: Difficulty estimate, clamped to [-3, 3].
        stability: Retention stability in days, clamped to [0, 365].
        priority: Scheduling priority, clamped to [0, 1].
        component: Language component.
        last_updated: When any field was last written.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    object_id: str = Field(min_length=1, description="Object identifier")
    mastery_stage: MasteryStage = Field(
        default=MasteryStage.FOUNDATIONAL,
        description="Current mastery stage",
    )
    difficulty: float = Field(default=0.0, description="Difficulty estimate (-3 to 3)")
    stability: float = Field(default=0.0, description="Stability in days (0 to 365)")
    priority: float = Field(default=0.5, description="Scheduling priority (0 to 1)")
    component: ComponentType = Field(default=ComponentType.LEX, description="Language component")
    last_updated: datetime = Field(default_factory=utc_now, description="Last write time")

    @field_validator("difficulty")
    @classmethod
    def _clamp_difficulty(cls, v: float) -> float:
        return clamp(v, DIFFICULTY_MIN, DIFFICULTY_MAX)

    @field_validator("stability")
    @classmethod
    def _clamp_stability(cls, v: float) -> float:
        return clamp(v, STABILITY_MIN, STABILITY_MAX)

    @field_validator("priority")
    @classmethod
    def _clamp_priority(cls, v: float) -> float:
        return clamp(v, PRIORITY_MIN, PRIORITY_MAX)
