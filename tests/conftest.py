"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import structlog

# Add tests directory to path so factories can be imported
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from factories import make_event, make_relation, make_state  # noqa: E402

from lexripple.models import ObjectPropagationState, TransferType  # noqa: E402


@pytest.fixture(autouse=True)
def clean_log_context():
    """Start and end every test with an empty logging context."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def event():
    """Stage 1 -> 2 response with perfect accuracy on object "run"."""
    return make_event()


@pytest.fixture
def family_states() -> dict[str, ObjectPropagationState]:
    """States for a small morphological family rooted at "run"."""
    return {
        "run": make_state("run", difficulty=0.0, stability=30.0),
        "running": make_state("running", difficulty=1.0),
        "runner": make_state("runner", difficulty=1.0),
        "rerun": make_state("rerun", difficulty=1.0),
    }


@pytest.fixture
def family_relations():
    """run -> running -> runner, run -> rerun."""
    return [
        make_relation("run", "running", TransferType.MORPHOLOGICAL),
        make_relation("running", "runner", TransferType.MORPHOLOGICAL),
        make_relation("run", "rerun", TransferType.MORPHOLOGICAL, strength=0.6),
    ]
