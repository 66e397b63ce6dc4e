#!/usr/bin/env python3
"""Indirect-update propagation demo.

Shows how one learner response on "run" ripples through a small network
of related words:

- run -> running, runner      (morphological family)
- running -> marathon         (collocational, two hops from "run")
- run -> sun                  (phonological, weak)

No external services required - runs entirely locally.
"""

from lexripple import (
    ComponentType,
    ObjectPropagationState,
    ObjectUpdateEvent,
    PropagationConfig,
    PropagationEngine,
    TransferRelation,
    TransferType,
    UpdateType,
)


def main() -> None:
    print("=" * 60)
    print("LexRipple Propagation Demo")
    print("=" * 60)

    states = {
        "run": ObjectPropagationState(object_id="run", mastery_stage=2, stability=30.0),
        "running": ObjectPropagationState(object_id="running", difficulty=0.8, stability=4.0),
        "runner": ObjectPropagationState(object_id="runner", difficulty=1.2, stability=2.0),
        "marathon": ObjectPropagationState(object_id="marathon", difficulty=1.5),
        "sun": ObjectPropagationState(object_id="sun", difficulty=-0.5, mastery_stage=3),
    }
    relations = [
        TransferRelation(
            source_id="run",
            target_id="running",
            transfer_type=TransferType.MORPHOLOGICAL,
            strength=0.9,
            confidence=0.95,
            mediating_feature="-ing",
        ),
        TransferRelation(
            source_id="run",
            target_id="runner",
            transfer_type=TransferType.MORPHOLOGICAL,
            strength=0.8,
            confidence=0.9,
            mediating_feature="-er",
        ),
        TransferRelation(
            source_id="running",
            target_id="marathon",
            transfer_type=TransferType.COLLOCATIONAL,
            strength=0.7,
            confidence=0.8,
        ),
        TransferRelation(
            source_id="run",
            target_id="sun",
            transfer_type=TransferType.PHONOLOGICAL,
            strength=0.3,
            confidence=0.6,
        ),
    ]

    event = ObjectUpdateEvent(
        source_object_id="run",
        update_type=UpdateType.ASSESSMENT,
        previous_stage=2,
        new_stage=3,
        accuracy=0.9,
        response_time_ms=1800,
        component=ComponentType.LEX,
    )

    print(f"\n{'─' * 60}")
    print("Before")
    print("─" * 60)
    for state in states.values():
        print(
            f"  {state.object_id:10} difficulty={state.difficulty:+.2f} "
            f"stability={state.stability:5.1f}d priority={state.priority:.2f}"
        )

    engine = PropagationEngine(config=PropagationConfig(max_depth=2))
    outcome = engine.process(event, relations, states)

    print(f"\n{'─' * 60}")
    print("Indirect updates")
    print("─" * 60)
    for update in outcome.result.indirect_updates:
        print(
            f"  depth {update.depth} → {update.target_object_id:10} "
            f"{update.relationship_type.value:14} magnitude={update.magnitude:.3f}"
        )
        print(f"    {update.reason}")

    print(f"\n{'─' * 60}")
    print("After")
    print("─" * 60)
    for state in states.values():
        print(
            f"  {state.object_id:10} difficulty={state.difficulty:+.2f} "
            f"stability={state.stability:5.1f}d priority={state.priority:.2f}"
        )

    print(f"\n  {outcome.summary}")
    print(f"  History entries: {len(engine.history)}")


if __name__ == "__main__":
    main()
