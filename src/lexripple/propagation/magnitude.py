"""Magnitude model for indirect updates.

Pure functions turning a learning event into a base magnitude, attenuating
it along one relation, and deriving the difficulty, stability and priority
deltas an indirect update carries.

Magnitude along an edge at depth d:

    base * strength * relationship_weight * decay ** (d - 1) * confidence

so influence shrinks geometrically with each hop and dies out even on
dense or cyclic graphs.
"""

from __future__ import annotations

from lexripple.config import DEFAULT_PROPAGATION_CONFIG, PropagationConfig
from lexripple.models import (
    MasteryStage,
    ObjectPropagationState,
    ObjectUpdateEvent,
    TransferRelation,
    clamp,
)

# Weight by the stage the object advanced *from*: later advances transfer more.
STAGE_IMPROVEMENT_WEIGHTS: dict[int, float] = {
    MasteryStage.FOUNDATIONAL: 0.2,  # 0 -> 1
    MasteryStage.RECOGNITION: 0.5,  # 1 -> 2
    MasteryStage.RECALL: 0.8,  # 2 -> 3
    MasteryStage.CONTROLLED: 1.0,  # 3 -> 4
}
DEFAULT_STAGE_WEIGHT = 0.5
MAINTENANCE_STAGE_WEIGHT = 0.3  # No advance: review/maintenance signal

MAX_DIFFICULTY_REDUCTION = 0.5
EASIER_TARGET_FACTOR = 0.5
MAX_STABILITY_BOOST_DAYS = 3.0
STABILITY_REFERENCE_DAYS = 30.0
PRIORITY_REDUCTION_FACTOR = 0.3
PRIORITY_FROZEN_STAGE = MasteryStage.CONTROLLED
CONFIDENCE_LOSS_PER_HOP = 0.2


def calculate_base_magnitude(
    event: ObjectUpdateEvent,
    config: PropagationConfig | None = None,
) -> float:
    """Compute how strongly an event should spread to related objects.

    Combines a stage weight (looked up by the previous stage when the
    stage advanced, a fixed maintenance weight otherwise), the event
    accuracy and the update-type multiplier. Accuracy gates the product,
    so an accuracy of 0 always yields 0.

    Args:
        event: Direct update event.
        config: Propagation configuration. Uses the default if None.

    Returns:
        Base magnitude in [0, 1].
    """
    if config is None:
        config = DEFAULT_PROPAGATION_CONFIG

    if event.advanced:
        stage_weight = STAGE_IMPROVEMENT_WEIGHTS.get(event.previous_stage, DEFAULT_STAGE_WEIGHT)
    else:
        stage_weight = MAINTENANCE_STAGE_WEIGHT

    type_weight = config.update_type_weights.weight_for(event.update_type)

    return clamp(stage_weight * event.accuracy * type_weight, 0.0, 1.0)


def calculate_propagation_magnitude(
    base_magnitude: float,
    relation: TransferRelation,
    depth: int,
    config: PropagationConfig | None = None,
) -> float:
    """Attenuate a magnitude along one relation at a given hop depth.

    Args:
        base_magnitude: Magnitude arriving at the relation's source.
        relation: Edge being followed.
        depth: Hop count of the relation's target (1 = direct neighbour).
        config: Propagation configuration. Uses the default if None.

    Returns:
        Magnitude in [0, 1]; 0 beyond max_depth.
    """
    if config is None:
        config = DEFAULT_PROPAGATION_CONFIG

    if depth > config.max_depth:
        return 0.0

    type_weight = config.relationship_weights.weight_for(relation.transfer_type)
    depth_factor = config.depth_decay_factor ** (depth - 1)

    magnitude = base_magnitude * relation.strength * type_weight * depth_factor * relation.confidence
    return clamp(magnitude, 0.0, 1.0)


def calculate_difficulty_adjustment(
    magnitude: float,
    source_state: ObjectPropagationState,
    target_state: ObjectPropagationState,
) -> float:
    """Difficulty delta for the target (negative = easier).

    At most 0.5 difficulty units per update, halved when the target is
    not harder than the source.
    """
    base_adjustment = -magnitude * MAX_DIFFICULTY_REDUCTION
    gap = target_state.difficulty - source_state.difficulty
    gap_factor = 1.0 if gap > 0 else EASIER_TARGET_FACTOR
    return base_adjustment * gap_factor


def calculate_stability_boost(
    magnitude: float,
    source_state: ObjectPropagationState,
) -> float:
    """Stability boost in days, scaled by the source's stability, capped at 3."""
    boost = magnitude * (source_state.stability / STABILITY_REFERENCE_DAYS) * MAX_STABILITY_BOOST_DAYS
    return clamp(boost, 0.0, MAX_STABILITY_BOOST_DAYS)


def calculate_priority_adjustment(
    magnitude: float,
    target_state: ObjectPropagationState,
) -> float:
    """Priority delta (negative = less urgent); 0 for targets at stage 3+."""
    if target_state.mastery_stage >= PRIORITY_FROZEN_STAGE:
        return 0.0
    return -magnitude * PRIORITY_REDUCTION_FACTOR


def calculate_update_confidence(relation: TransferRelation, depth: int) -> float:
    """Confidence in an indirect update: relation confidence minus 20% per extra hop."""
    return clamp(relation.confidence * (1.0 - (depth - 1) * CONFIDENCE_LOSS_PER_HOP), 0.0, 1.0)
