"""Bounded breadth-first propagation over the relation graph.

Design principles:
1. Each object is visited at most once; the first (shortest) path wins
2. Only outgoing edges are followed
3. Each hop starts from the magnitude of the update that reached the
   parent, so attenuation compounds along a chain
4. Weak updates are dropped before they can spread further
5. Hard ceilings on depth and target count bound work on dense graphs
"""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Iterable, Mapping
from typing import NamedTuple

from lexripple.config import (
    DEFAULT_PROPAGATION_CONFIG,
    MAX_PROPAGATION_TARGETS,
    PropagationConfig,
)
from lexripple.logging import get_logger
from lexripple.models import (
    IndirectUpdate,
    ObjectPropagationState,
    ObjectUpdateEvent,
    PropagationResult,
    TransferRelation,
    TransferType,
)

from .magnitude import (
    calculate_base_magnitude,
    calculate_difficulty_adjustment,
    calculate_priority_adjustment,
    calculate_propagation_magnitude,
    calculate_stability_boost,
    calculate_update_confidence,
)

logger = get_logger(__name__)


class _QueueItem(NamedTuple):
    object_id: str
    depth: int
    inbound_magnitude: float


def build_adjacency(
    relations: Iterable[TransferRelation],
) -> dict[str, list[TransferRelation]]:
    """Index relations by source ID, keeping edge-list order per source."""
    adjacency: dict[str, list[TransferRelation]] = {}
    for relation in relations:
        adjacency.setdefault(relation.source_id, []).append(relation)
    return adjacency


def create_indirect_update(
    event: ObjectUpdateEvent,
    relation: TransferRelation,
    source_state: ObjectPropagationState,
    target_state: ObjectPropagationState,
    base_magnitude: float,
    depth: int,
    config: PropagationConfig | None = None,
) -> IndirectUpdate | None:
    """Build the indirect update one relation carries to its target.

    Args:
        event: Source update event.
        relation: Relation to the target.
        source_state: State of the event's source object.
        target_state: State of the relation's target.
        base_magnitude: Magnitude arriving at the relation's source.
        depth: Hop count of the target.
        config: Propagation configuration. Uses the default if None.

    Returns:
        The update, or None if its magnitude is below min_magnitude.
    """
    if config is None:
        config = DEFAULT_PROPAGATION_CONFIG

    magnitude = calculate_propagation_magnitude(base_magnitude, relation, depth, config)
    if magnitude < config.min_magnitude:
        return None

    difficulty_adjustment = (
        calculate_difficulty_adjustment(magnitude, source_state, target_state)
        if config.update_difficulty
        else 0.0
    )
    stability_boost = (
        calculate_stability_boost(magnitude, source_state) if config.update_stability else 0.0
    )
    priority_adjustment = (
        calculate_priority_adjustment(magnitude, target_state) if config.update_priority else 0.0
    )

    if event.advanced:
        reason = (
            f"Transfer from {event.source_object_id} "
            f"(stage {int(event.previous_stage)}→{int(event.new_stage)})"
        )
    else:
        reason = f"Reinforcement from {event.source_object_id} review"

    return IndirectUpdate(
        target_object_id=relation.target_id,
        source_object_id=event.source_object_id,
        relationship_type=relation.transfer_type,
        magnitude=magnitude,
        difficulty_adjustment=difficulty_adjustment,
        stability_boost=stability_boost,
        priority_adjustment=priority_adjustment,
        confidence=calculate_update_confidence(relation, depth),
        depth=depth,
        reason=reason,
    )


def propagate_update(
    event: ObjectUpdateEvent,
    relations: Iterable[TransferRelation],
    object_states: Mapping[str, ObjectPropagationState],
    config: PropagationConfig | None = None,
) -> PropagationResult:
    """Propagate one learning event through the relation network.

    Performs a breadth-first traversal from the event's source, producing
    at most one indirect update per reachable object. Nothing is written to
    ``object_states``; pass the result to ``apply_indirect_updates``.

    Args:
        event: Source update event.
        relations: Flat edge list (snapshot for this call).
        object_states: Known object states by ID.
        config: Propagation configuration. Uses the default if None.

    Returns:
        PropagationResult, empty when propagation is disabled or the
        source object has no state.
    """
    if config is None:
        config = DEFAULT_PROPAGATION_CONFIG

    start_time = time.perf_counter()

    if not config.enabled:
        logger.debug("propagation_disabled", source_object_id=event.source_object_id)
        return PropagationResult.empty(event)

    source_state = object_states.get(event.source_object_id)
    if source_state is None:
        logger.info("propagation_skipped_unknown_source", source_object_id=event.source_object_id)
        return PropagationResult.empty(
            event, processing_time_ms=(time.perf_counter() - start_time) * 1000
        )

    base_magnitude = calculate_base_magnitude(event, config)
    adjacency = build_adjacency(relations)
    depth_limit = config.effective_max_depth

    updates: list[IndirectUpdate] = []
    by_relation_type: dict[TransferType, float] = {}
    visited: set[str] = {event.source_object_id}
    queue: deque[_QueueItem] = deque([_QueueItem(event.source_object_id, 0, base_magnitude)])
    truncated = False

    while queue and not truncated:
        current = queue.popleft()
        if current.depth >= depth_limit:
            continue

        next_depth = current.depth + 1
        for relation in adjacency.get(current.object_id, ()):
            if len(updates) >= MAX_PROPAGATION_TARGETS:
                truncated = True
                break

            if relation.target_id in visited:
                continue
            visited.add(relation.target_id)

            target_state = object_states.get(relation.target_id)
            if target_state is None:
                logger.debug(
                    "propagation_target_unknown",
                    source_object_id=current.object_id,
                    target_object_id=relation.target_id,
                )
                continue

            update = create_indirect_update(
                event,
                relation,
                source_state,
                target_state,
                current.inbound_magnitude,
                next_depth,
                config,
            )
            if update is None:
                logger.debug(
                    "propagation_update_below_threshold",
                    target_object_id=relation.target_id,
                    depth=next_depth,
                )
                continue

            updates.append(update)
            by_relation_type[relation.transfer_type] = (
                by_relation_type.get(relation.transfer_type, 0.0) + update.magnitude
            )

            if next_depth < depth_limit:
                queue.append(_QueueItem(relation.target_id, next_depth, update.magnitude))

    if truncated:
        logger.warning(
            "propagation_truncated",
            source_object_id=event.source_object_id,
            max_targets=MAX_PROPAGATION_TARGETS,
        )

    result = PropagationResult(
        source_event=event,
        indirect_updates=updates,
        total_affected=len(updates),
        cumulative_magnitude=sum(u.magnitude for u in updates),
        by_relation_type=by_relation_type,
        processing_time_ms=(time.perf_counter() - start_time) * 1000,
    )

    logger.info(
        "propagation_complete",
        source_object_id=event.source_object_id,
        base_magnitude=round(base_magnitude, 4),
        total_affected=result.total_affected,
        cumulative_magnitude=round(result.cumulative_magnitude, 4),
        processing_time_ms=round(result.processing_time_ms, 3),
    )

    return result
