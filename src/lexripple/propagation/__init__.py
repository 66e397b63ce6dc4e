"""Indirect-update propagation between related language objects.

When a learner's response changes one object's mastery, part of that
change leaks to related objects (word family members, collocates, similar
sounds) without re-testing them.

Pipeline:
    1. calculate_base_magnitude: how strongly the event should spread
    2. propagate_update: bounded BFS producing one IndirectUpdate per object
    3. aggregate_by_target: merge updates sharing a target (optional)
    4. apply_indirect_updates: clamp-write deltas into object state
    5. UpdateHistory / summarize_propagation: audit and report

Example:
    ```python
    from lexripple.config import DEFAULT_PROPAGATION_CONFIG
    from lexripple.propagation import (
        apply_indirect_updates,
        propagate_update,
        summarize_propagation,
    )

    result = propagate_update(event, relations, states, DEFAULT_PROPAGATION_CONFIG)
    apply_indirect_updates(result.indirect_updates, states)
    print(summarize_propagation(result))
    ```

References:
- Nagy et al. 1989: Morphological family effects
- Collins & Loftus 1975: Spreading activation in semantic networks
"""

from .aggregation import (
    aggregate_by_target,
    aggregate_updates,
    diminishing_weight,
    filter_by_magnitude,
    group_by_target,
)
from .apply import apply_indirect_updates
from .graph import build_adjacency, create_indirect_update, propagate_update
from .history import UpdateHistory, create_history_entry, summarize_propagation
from .magnitude import (
    MAINTENANCE_STAGE_WEIGHT,
    STAGE_IMPROVEMENT_WEIGHTS,
    calculate_base_magnitude,
    calculate_difficulty_adjustment,
    calculate_priority_adjustment,
    calculate_propagation_magnitude,
    calculate_stability_boost,
    calculate_update_confidence,
)

__all__ = [
    # Magnitude model
    "calculate_base_magnitude",
    "calculate_difficulty_adjustment",
    "calculate_priority_adjustment",
    "calculate_propagation_magnitude",
    "calculate_stability_boost",
    "calculate_update_confidence",
    # Traversal
    "build_adjacency",
    "create_indirect_update",
    "propagate_update",
    # Aggregation
    "aggregate_by_target",
    "aggregate_updates",
    "diminishing_weight",
    "filter_by_magnitude",
    "group_by_target",
    # Application
    "apply_indirect_updates",
    # History and reporting
    "UpdateHistory",
    "create_history_entry",
    "summarize_propagation",
    # Constants
    "MAINTENANCE_STAGE_WEIGHT",
    "STAGE_IMPROVEMENT_WEIGHTS",
]
