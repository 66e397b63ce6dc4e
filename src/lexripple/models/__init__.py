"""Data models for LexRipple.

Inputs:
    - ObjectUpdateEvent: Direct learning signal for one object
    - TransferRelation: Directed edge of the relation graph
    - ObjectPropagationState: Mutable, clamped per-object learning state

Outputs:
    - IndirectUpdate: Secondary adjustment for a related object
    - PropagationResult: Summary of one propagation run
    - UpdateHistoryEntry: Audit record of an applied update
"""

from .base import (
    ComponentType,
    MasteryStage,
    TransferDirection,
    TransferType,
    UpdateType,
    clamp,
    utc_now,
)
from .event import ObjectUpdateEvent
from .history import UpdateHistoryEntry
from .relation import TransferRelation
from .state import ObjectPropagationState
from .update import IndirectUpdate, PropagationResult

__all__ = [
    # Enumerations
    "ComponentType",
    "MasteryStage",
    "TransferDirection",
    "TransferType",
    "UpdateType",
    # Helpers
    "clamp",
    "utc_now",
    # Models
    "IndirectUpdate",
    "ObjectPropagationState",
    "ObjectUpdateEvent",
    "PropagationResult",
    "TransferRelation",
    "UpdateHistoryEntry",
]
