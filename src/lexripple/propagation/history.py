"""Audit history and reporting for propagation runs."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from datetime import datetime

from lexripple.config import MAX_UPDATE_HISTORY
from lexripple.exceptions import ValidationError
from lexripple.models import IndirectUpdate, PropagationResult, UpdateHistoryEntry, utc_now


def create_history_entry(
    update: IndirectUpdate,
    timestamp: datetime | None = None,
) -> UpdateHistoryEntry:
    """Convert an applied update into an audit entry."""
    return UpdateHistoryEntry(
        timestamp=timestamp if timestamp is not None else utc_now(),
        source_object_id=update.source_object_id,
        target_object_id=update.target_object_id,
        magnitude=update.magnitude,
        relationship_type=update.relationship_type,
    )


class UpdateHistory:
    """Bounded audit log of applied updates.

    When full, recording a new entry evicts the oldest one.

    Example:
        ```python
        history = UpdateHistory(max_entries=100)
        history.record_all(result.indirect_updates)
        recent = history.for_target("running")
        ```
    """

    def __init__(self, max_entries: int = MAX_UPDATE_HISTORY) -> None:
        if not 1 <= max_entries <= MAX_UPDATE_HISTORY:
            raise ValidationError(
                "max_entries", f"must be between 1 and {MAX_UPDATE_HISTORY}, got {max_entries}"
            )
        self.max_entries = max_entries
        self._entries: deque[UpdateHistoryEntry] = deque(maxlen=max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, update: IndirectUpdate, timestamp: datetime | None = None) -> UpdateHistoryEntry:
        """Record one applied update and return its entry."""
        entry = create_history_entry(update, timestamp)
        self._entries.append(entry)
        return entry

    def record_all(
        self,
        updates: Iterable[IndirectUpdate],
        timestamp: datetime | None = None,
    ) -> list[UpdateHistoryEntry]:
        """Record several updates sharing one timestamp."""
        if timestamp is None:
            timestamp = utc_now()
        return [self.record(update, timestamp) for update in updates]

    def entries(self) -> list[UpdateHistoryEntry]:
        """All retained entries, oldest first."""
        return list(self._entries)

    def for_target(self, object_id: str) -> list[UpdateHistoryEntry]:
        """Retained entries that adjusted object_id, oldest first."""
        return [e for e in self._entries if e.target_object_id == object_id]

    def for_source(self, object_id: str) -> list[UpdateHistoryEntry]:
        """Retained entries caused by object_id, oldest first."""
        return [e for e in self._entries if e.source_object_id == object_id]

    def clear(self) -> None:
        """Drop all retained entries."""
        self._entries.clear()


def summarize_propagation(result: PropagationResult) -> str:
    """Render a one-line human-readable summary of a propagation run.

    Example: "Propagation affected 2 objects (total magnitude: 0.56,
    types: morphological: 0.56, time: 0.12ms)"
    """
    if result.total_affected == 0:
        return "No objects affected by propagation"

    type_breakdown = ", ".join(
        f"{transfer_type.value}: {magnitude:.2f}"
        for transfer_type, magnitude in result.by_relation_type.items()
    )

    return (
        f"Propagation affected {result.total_affected} objects "
        f"(total magnitude: {result.cumulative_magnitude:.2f}, "
        f"types: {type_breakdown}, "
        f"time: {result.processing_time_ms:.2f}ms)"
    )
