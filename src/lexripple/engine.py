"""Propagation engine: propagate, aggregate, apply and record in one call.

Example:
    ```python
    from lexripple.engine import PropagationEngine

    engine = PropagationEngine.from_settings()
    outcome = engine.process(event, relations, object_states)
    print(outcome.summary)
    ```
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, MutableMapping, Sequence
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from lexripple.config import DEFAULT_PROPAGATION_CONFIG, PropagationConfig, Settings
from lexripple.logging import get_logger, propagation_context
from lexripple.models import (
    IndirectUpdate,
    ObjectPropagationState,
    ObjectUpdateEvent,
    PropagationResult,
    TransferRelation,
    utc_now,
)
from lexripple.propagation import (
    UpdateHistory,
    aggregate_by_target,
    apply_indirect_updates,
    propagate_update,
    summarize_propagation,
)

logger = get_logger(__name__)


class ProcessOutcome(BaseModel):
    """What one engine call computed and committed.

    Attributes:
        result: Raw propagation result.
        applied_updates: Updates actually handed to the state applier
            (aggregated per target when aggregation is on).
        states_modified: Number of object states written.
    """

    model_config = ConfigDict(extra="forbid")

    result: PropagationResult
    applied_updates: list[IndirectUpdate] = Field(default_factory=list)
    states_modified: int = Field(default=0, ge=0)

    @property
    def summary(self) -> str:
        """Human-readable summary of the propagation."""
        return summarize_propagation(self.result)


class BatchOutcome(BaseModel):
    """What one batched engine call computed and committed.

    Attributes:
        results: Propagation result per event, in input order.
        applied_updates: Updates handed to the state applier.
        states_modified: Number of object states written.
    """

    model_config = ConfigDict(extra="forbid")

    results: list[PropagationResult] = Field(default_factory=list)
    applied_updates: list[IndirectUpdate] = Field(default_factory=list)
    states_modified: int = Field(default=0, ge=0)


@dataclass
class PropagationEngine:
    """Runs the full indirect-update pipeline against a state store.

    Writes from concurrent calls on the same engine are serialized, so two
    propagations never interleave their writes. Calls through different
    engines over the same states are last-writer-wins.

    Attributes:
        config: Propagation configuration used for every call.
        history: Audit log of applied updates.
        aggregate: Merge updates sharing a target before applying them.
    """

    config: PropagationConfig = DEFAULT_PROPAGATION_CONFIG
    history: UpdateHistory = field(default_factory=UpdateHistory)
    aggregate: bool = True

    _write_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PropagationEngine:
        """Create an engine from process settings.

        Args:
            settings: Optional settings. Loads from the environment if None.
        """
        if settings is None:
            settings = Settings()

        return cls(
            config=settings.propagation_config(),
            history=UpdateHistory(max_entries=settings.history_max_entries),
            aggregate=settings.aggregate_updates,
        )

    def process(
        self,
        event: ObjectUpdateEvent,
        relations: Iterable[TransferRelation],
        object_states: MutableMapping[str, ObjectPropagationState],
    ) -> ProcessOutcome:
        """Propagate one event and commit the resulting updates.

        Args:
            event: Source update event.
            relations: Flat edge list for this call.
            object_states: Mutable state store, written in place.

        Returns:
            ProcessOutcome with the raw result and what was applied.
        """
        with propagation_context(event):
            result = propagate_update(event, relations, object_states, self.config)
            updates = self._prepare(result.indirect_updates)
            states_modified = self._commit(updates, object_states)

        return ProcessOutcome(
            result=result,
            applied_updates=updates,
            states_modified=states_modified,
        )

    def process_batch(
        self,
        events: Sequence[ObjectUpdateEvent],
        relations: Iterable[TransferRelation],
        object_states: MutableMapping[str, ObjectPropagationState],
    ) -> BatchOutcome:
        """Propagate several events, then commit their updates together.

        All events are propagated against the states as they were before
        the batch; updates from different events reaching the same target
        are merged (when aggregation is on) and applied once.

        Args:
            events: Source update events, e.g. one session's responses.
            relations: Flat edge list shared by every event.
            object_states: Mutable state store, written in place.

        Returns:
            BatchOutcome with a result per event and what was applied.
        """
        relations = list(relations)
        results = []
        for event in events:
            with propagation_context(event):
                results.append(propagate_update(event, relations, object_states, self.config))
        pending = [u for result in results for u in result.indirect_updates]
        updates = self._prepare(pending)
        states_modified = self._commit(updates, object_states)

        logger.info(
            "propagation_batch_complete",
            events=len(events),
            pending_updates=len(pending),
            applied_updates=len(updates),
            states_modified=states_modified,
        )

        return BatchOutcome(
            results=results,
            applied_updates=updates,
            states_modified=states_modified,
        )

    def _prepare(self, updates: list[IndirectUpdate]) -> list[IndirectUpdate]:
        if self.aggregate:
            return aggregate_by_target(updates)
        return list(updates)

    def _commit(
        self,
        updates: list[IndirectUpdate],
        object_states: MutableMapping[str, ObjectPropagationState],
    ) -> int:
        if not updates:
            return 0

        with self._write_lock:
            applied_at = utc_now()
            modified = apply_indirect_updates(updates, object_states, applied_at)
            # Only updates whose target exists were applied
            self.history.record_all(
                (u for u in updates if u.target_object_id in object_states),
                applied_at,
            )

        return modified


__all__ = ["BatchOutcome", "ProcessOutcome", "PropagationEngine"]
