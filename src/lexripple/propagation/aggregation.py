"""Combining indirect updates that share a target.

Multi-parent graphs and batched events can queue several updates for one
object. They are merged with diminishing returns: the i-th update
(0-indexed, arrival order) contributes with weight 1 / (1 + 0.5 * i), so a
redundant signal adds less than the first one did.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from lexripple.models import IndirectUpdate, clamp

DIMINISHING_RATE = 0.5

# Caps on an aggregated update
MAX_AGGREGATE_MAGNITUDE = 1.0
MIN_AGGREGATE_DIFFICULTY = -1.0
MAX_AGGREGATE_STABILITY = 5.0
MAX_AGGREGATE_PRIORITY = 0.5


def diminishing_weight(index: int) -> float:
    """Weight of the index-th merged update."""
    return 1.0 / (1.0 + index * DIMINISHING_RATE)


def filter_by_magnitude(
    updates: Iterable[IndirectUpdate],
    min_magnitude: float,
) -> list[IndirectUpdate]:
    """Keep updates with magnitude >= min_magnitude, preserving order."""
    return [u for u in updates if u.magnitude >= min_magnitude]


def group_by_target(updates: Iterable[IndirectUpdate]) -> dict[str, list[IndirectUpdate]]:
    """Group updates by target ID in first-seen order."""
    grouped: dict[str, list[IndirectUpdate]] = {}
    for update in updates:
        grouped.setdefault(update.target_object_id, []).append(update)
    return grouped


def aggregate_updates(updates: Sequence[IndirectUpdate]) -> IndirectUpdate | None:
    """Merge updates for the same target into one.

    Args:
        updates: Updates sharing a target, in arrival order.

    Returns:
        None for an empty list, the update itself for a single update,
        otherwise a merged update whose relationship type is the most
        frequent one (ties go to the first seen) and whose depth is the
        shallowest.
    """
    if not updates:
        return None
    if len(updates) == 1:
        return updates[0]

    total_magnitude = 0.0
    total_difficulty = 0.0
    total_stability = 0.0
    total_priority = 0.0
    total_confidence = 0.0

    for i, update in enumerate(updates):
        weight = diminishing_weight(i)
        total_magnitude += update.magnitude * weight
        total_difficulty += update.difficulty_adjustment * weight
        total_stability += update.stability_boost * weight
        total_priority += update.priority_adjustment * weight
        total_confidence += update.confidence * weight

    # Counter preserves insertion order among equal counts
    dominant_type = Counter(u.relationship_type for u in updates).most_common(1)[0][0]

    return IndirectUpdate(
        target_object_id=updates[0].target_object_id,
        source_object_id=f"multiple ({len(updates)})",
        relationship_type=dominant_type,
        magnitude=min(MAX_AGGREGATE_MAGNITUDE, total_magnitude),
        difficulty_adjustment=max(MIN_AGGREGATE_DIFFICULTY, total_difficulty),
        stability_boost=min(MAX_AGGREGATE_STABILITY, total_stability),
        priority_adjustment=clamp(total_priority, -MAX_AGGREGATE_PRIORITY, MAX_AGGREGATE_PRIORITY),
        confidence=min(1.0, total_confidence / len(updates)),
        depth=min(u.depth for u in updates),
        reason=f"Aggregated from {len(updates)} sources",
    )


def aggregate_by_target(updates: Iterable[IndirectUpdate]) -> list[IndirectUpdate]:
    """Collapse updates to one per target, in first-seen target order."""
    aggregated: list[IndirectUpdate] = []
    for group in group_by_target(updates).values():
        merged = aggregate_updates(group)
        if merged is not None:
            aggregated.append(merged)
    return aggregated
