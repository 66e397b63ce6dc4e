"""Shared enumerations and helpers for LexRipple models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum, IntEnum


class MasteryStage(IntEnum):
    """Ordinal mastery progression of one language object."""

    FOUNDATIONAL = 0
    RECOGNITION = 1
    RECALL = 2
    CONTROLLED = 3
    FLUENT = 4


class UpdateType(str, Enum):
    """What kind of learner interaction produced an update event."""

    RESPONSE = "response"  # Regular task response
    REVIEW = "review"  # Spaced review
    ASSESSMENT = "assessment"  # Formal assessment
    INITIAL = "initial"  # First exposure
    CORRECTION = "correction"  # Error correction


class TransferType(str, Enum):
    """Kind of relationship along which learning transfers."""

    MORPHOLOGICAL = "morphological"  # run -> running, runner
    COLLOCATIONAL = "collocational"  # make + decision
    SEMANTIC = "semantic"  # big <-> large
    SYNTACTIC = "syntactic"  # V + to-infinitive
    PHONOLOGICAL = "phonological"  # cat, bat, hat
    ORTHOGRAPHIC = "orthographic"  # -ight words


class TransferDirection(str, Enum):
    """Direction a relationship was discovered in."""

    FORWARD = "forward"
    BACKWARD = "backward"
    BIDIRECTIONAL = "bidirectional"


class ComponentType(str, Enum):
    """Language component, ordered PHON -> MORPH -> LEX -> SYNT -> PRAG."""

    PHON = "PHON"
    MORPH = "MORPH"
    LEX = "LEX"
    SYNT = "SYNT"
    PRAG = "PRAG"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
