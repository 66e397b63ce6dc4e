"""LexRipple: learning that spreads.

Propagates learning-state updates across a network of related language
objects (words, morphemes, sounds, structures). When a learner's response
changes one object's mastery, related objects receive bounded, decaying
indirect updates without being re-tested.

Quick Start:
    from lexripple import PropagationEngine

    engine = PropagationEngine()
    outcome = engine.process(event, relations, object_states)
    print(outcome.summary)

Pipeline:
    - Magnitude model: how strongly an event spreads along each edge
    - Graph propagator: bounded BFS, one update per reachable object
    - Aggregator: diminishing-returns merge of updates sharing a target
    - Applier: clamped writes into object state
    - History: bounded audit log and run summaries
"""

__version__ = "0.1.0"

# Configuration
from .config import (
    DEFAULT_PROPAGATION_CONFIG,
    MAX_PROPAGATION_DEPTH,
    MAX_PROPAGATION_TARGETS,
    MAX_UPDATE_HISTORY,
    PropagationConfig,
    RelationshipWeights,
    Settings,
    UpdateTypeWeights,
    settings,
)

# Engine
from .engine import BatchOutcome, ProcessOutcome, PropagationEngine

# Exceptions
from .exceptions import LexRippleError, ValidationError

# Logging
from .logging import (
    bind_context,
    configure_logging,
    get_logger,
    logger,
    propagation_context,
    unbind_context,
)

# Models
from .models import (
    ComponentType,
    IndirectUpdate,
    MasteryStage,
    ObjectPropagationState,
    ObjectUpdateEvent,
    PropagationResult,
    TransferDirection,
    TransferRelation,
    TransferType,
    UpdateHistoryEntry,
    UpdateType,
)

# Propagation
from .propagation import (
    UpdateHistory,
    aggregate_by_target,
    aggregate_updates,
    apply_indirect_updates,
    calculate_base_magnitude,
    calculate_propagation_magnitude,
    create_history_entry,
    propagate_update,
    summarize_propagation,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "DEFAULT_PROPAGATION_CONFIG",
    "MAX_PROPAGATION_DEPTH",
    "MAX_PROPAGATION_TARGETS",
    "MAX_UPDATE_HISTORY",
    "PropagationConfig",
    "RelationshipWeights",
    "Settings",
    "UpdateTypeWeights",
    "settings",
    # Engine
    "BatchOutcome",
    "ProcessOutcome",
    "PropagationEngine",
    # Exceptions
    "LexRippleError",
    "ValidationError",
    # Logging
    "bind_context",
    "configure_logging",
    "get_logger",
    "logger",
    "propagation_context",
    "unbind_context",
    # Models
    "ComponentType",
    "IndirectUpdate",
    "MasteryStage",
    "ObjectPropagationState",
    "ObjectUpdateEvent",
    "PropagationResult",
    "TransferDirection",
    "TransferRelation",
    "TransferType",
    "UpdateHistoryEntry",
    "UpdateType",
    # Propagation
    "UpdateHistory",
    "aggregate_by_target",
    "aggregate_updates",
    "apply_indirect_updates",
    "calculate_base_magnitude",
    "calculate_propagation_magnitude",
    "create_history_entry",
    "propagate_update",
    "summarize_propagation",
]
