"""Writing indirect updates into object state."""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping
from datetime import datetime

from lexripple.logging import get_logger
from lexripple.models import IndirectUpdate, ObjectPropagationState, utc_now

logger = get_logger(__name__)


def apply_indirect_updates(
    updates: Iterable[IndirectUpdate],
    object_states: MutableMapping[str, ObjectPropagationState],
    applied_at: datetime | None = None,
) -> int:
    """Apply indirect updates to object states in place.

    Targets without a state are skipped; indirect effects never create
    state records. Difficulty, stability and priority stay clamped to
    their ranges by the state model. Every applied update stamps
    ``last_updated``, even when all of its deltas are zero.

    Re-applying a non-zero update compounds, so apply each
    PropagationResult exactly once.

    Args:
        updates: Updates to apply (raw or aggregated).
        object_states: Mutable map of object states.
        applied_at: Timestamp to stamp. Uses the current time if None.

    Returns:
        Number of updates applied.
    """
    if applied_at is None:
        applied_at = utc_now()

    modified = 0
    for update in updates:
        state = object_states.get(update.target_object_id)
        if state is None:
            logger.debug("apply_skipped_unknown_target", target_object_id=update.target_object_id)
            continue

        if update.difficulty_adjustment != 0:
            state.difficulty = state.difficulty + update.difficulty_adjustment
        if update.stability_boost > 0:
            state.stability = state.stability + update.stability_boost
        if update.priority_adjustment != 0:
            state.priority = state.priority + update.priority_adjustment

        state.last_updated = applied_at
        modified += 1

    return modified
