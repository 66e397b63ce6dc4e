"""Unit tests for the propagation magnitude model."""

from __future__ import annotations

import pytest
from factories import make_event, make_relation, make_state

from lexripple.config import PropagationConfig, RelationshipWeights, UpdateTypeWeights
from lexripple.models import TransferType, UpdateType
from lexripple.propagation.magnitude import (
    MAINTENANCE_STAGE_WEIGHT,
    calculate_base_magnitude,
    calculate_difficulty_adjustment,
    calculate_priority_adjustment,
    calculate_propagation_magnitude,
    calculate_stability_boost,
    calculate_update_confidence,
)


class TestCalculateBaseMagnitude:
    """Tests for calculate_base_magnitude."""

    def test_stage_one_to_two_response(self) -> None:
        """1 -> 2 with full accuracy on a response uses the 0.5 stage weight."""
        event = make_event(previous_stage=1, new_stage=2, accuracy=1.0)
        assert calculate_base_magnitude(event) == pytest.approx(0.5)

    def test_later_advances_weigh_more(self) -> None:
        """2 -> 3 should spread more than 0 -> 1."""
        early = make_event(previous_stage=0, new_stage=1)
        late = make_event(previous_stage=2, new_stage=3)
        assert calculate_base_magnitude(late) > calculate_base_magnitude(early)
        assert calculate_base_magnitude(early) == pytest.approx(0.2)
        assert calculate_base_magnitude(late) == pytest.approx(0.8)

    def test_maintenance_uses_fixed_weight(self) -> None:
        """No stage advance should use the maintenance weight."""
        event = make_event(previous_stage=2, new_stage=2, update_type=UpdateType.REVIEW)
        assert calculate_base_magnitude(event) == pytest.approx(MAINTENANCE_STAGE_WEIGHT * 0.8)

    def test_decline_uses_maintenance_weight(self) -> None:
        """A stage drop should also use the maintenance weight."""
        event = make_event(previous_stage=3, new_stage=1, accuracy=0.5)
        assert calculate_base_magnitude(event) == pytest.approx(0.15)

    def test_update_type_ordering(self) -> None:
        """assessment > response > review > initial > correction."""
        magnitudes = [
            calculate_base_magnitude(make_event(update_type=t))
            for t in (
                UpdateType.ASSESSMENT,
                UpdateType.RESPONSE,
                UpdateType.REVIEW,
                UpdateType.INITIAL,
                UpdateType.CORRECTION,
            )
        ]
        assert magnitudes == sorted(magnitudes, reverse=True)
        assert len(set(magnitudes)) == 5

    def test_clamped_to_one(self) -> None:
        """3 -> 4 assessment would be 1.2 and is clamped to 1.0."""
        event = make_event(previous_stage=3, new_stage=4, update_type=UpdateType.ASSESSMENT)
        assert calculate_base_magnitude(event) == 1.0

    def test_zero_accuracy_yields_zero(self) -> None:
        """Accuracy gates the whole product."""
        event = make_event(accuracy=0.0, update_type=UpdateType.ASSESSMENT)
        assert calculate_base_magnitude(event) == 0.0

    def test_monotonic_in_accuracy(self) -> None:
        """Higher accuracy never lowers the magnitude."""
        values = [
            calculate_base_magnitude(make_event(accuracy=a / 10)) for a in range(11)
        ]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_custom_update_type_weights(self) -> None:
        """Overridden update-type weights should be used."""
        config = PropagationConfig(update_type_weights=UpdateTypeWeights(response=0.5))
        assert calculate_base_magnitude(make_event(), config) == pytest.approx(0.25)


class TestCalculatePropagationMagnitude:
    """Tests for calculate_propagation_magnitude."""

    def test_direct_neighbour(self) -> None:
        """Depth 1 applies strength, type weight and confidence only."""
        relation = make_relation("a", "b", TransferType.MORPHOLOGICAL)
        assert calculate_propagation_magnitude(0.5, relation, 1) == pytest.approx(0.4)

    def test_all_factors_multiply(self) -> None:
        """Strength and confidence scale the magnitude."""
        relation = make_relation("a", "b", TransferType.SEMANTIC, strength=0.5, confidence=0.8)
        assert calculate_propagation_magnitude(1.0, relation, 1) == pytest.approx(0.16)

    def test_depth_decay(self) -> None:
        """Depth 2 applies one decay factor."""
        relation = make_relation("a", "b")
        assert calculate_propagation_magnitude(0.5, relation, 2) == pytest.approx(0.2)

    def test_beyond_max_depth_is_zero(self) -> None:
        """Depth past max_depth yields nothing."""
        relation = make_relation("a", "b")
        assert calculate_propagation_magnitude(1.0, relation, 3) == 0.0

    def test_strictly_decreasing_with_depth(self) -> None:
        """Each extra hop strictly shrinks the magnitude when decay < 1."""
        config = PropagationConfig(max_depth=6, depth_decay_factor=0.7)
        relation = make_relation("a", "b", TransferType.COLLOCATIONAL, strength=0.9)
        values = [calculate_propagation_magnitude(0.8, relation, d, config) for d in range(1, 7)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_clamped_to_unit_interval(self) -> None:
        """Amplifying weights still produce at most 1.0."""
        with pytest.warns(UserWarning):
            weights = RelationshipWeights(morphological=3.0)
        config = PropagationConfig(relationship_weights=weights)
        relation = make_relation("a", "b")
        assert calculate_propagation_magnitude(1.0, relation, 1, config) == 1.0


class TestDeltas:
    """Tests for difficulty, stability, priority and confidence deltas."""

    def test_difficulty_full_for_harder_target(self) -> None:
        """Harder targets get the full reduction."""
        source = make_state("s", difficulty=0.0)
        target = make_state("t", difficulty=1.0)
        assert calculate_difficulty_adjustment(0.4, source, target) == pytest.approx(-0.2)

    def test_difficulty_halved_for_easier_target(self) -> None:
        """Targets already easier than the source get half."""
        source = make_state("s", difficulty=1.0)
        target = make_state("t", difficulty=-1.0)
        assert calculate_difficulty_adjustment(0.4, source, target) == pytest.approx(-0.1)

    def test_difficulty_halved_for_equal_target(self) -> None:
        """Equal difficulty counts as not harder."""
        source = make_state("s", difficulty=0.5)
        target = make_state("t", difficulty=0.5)
        assert calculate_difficulty_adjustment(0.4, source, target) == pytest.approx(-0.1)

    def test_stability_scales_with_source(self) -> None:
        """A 30-day source gives magnitude * 3 days."""
        source = make_state("s", stability=30.0)
        assert calculate_stability_boost(0.4, source) == pytest.approx(1.2)

    def test_stability_capped(self) -> None:
        """Boost never exceeds 3 days."""
        source = make_state("s", stability=365.0)
        assert calculate_stability_boost(1.0, source) == 3.0

    def test_stability_zero_for_unstable_source(self) -> None:
        """A source with no stability transfers none."""
        source = make_state("s", stability=0.0)
        assert calculate_stability_boost(0.9, source) == 0.0

    def test_priority_lowered_for_low_stage(self) -> None:
        """Low-stage targets become less urgent."""
        target = make_state("t", mastery_stage=1)
        assert calculate_priority_adjustment(0.4, target) == pytest.approx(-0.12)

    @pytest.mark.parametrize("stage", [3, 4])
    def test_priority_untouched_for_mastered(self, stage: int) -> None:
        """Stage 3+ targets keep their priority."""
        target = make_state("t", mastery_stage=stage)
        assert calculate_priority_adjustment(0.9, target) == 0.0

    def test_update_confidence_loses_per_hop(self) -> None:
        """Confidence drops by 20% of the relation confidence per extra hop."""
        relation = make_relation("a", "b", confidence=1.0)
        assert calculate_update_confidence(relation, 1) == pytest.approx(1.0)
        assert calculate_update_confidence(relation, 2) == pytest.approx(0.8)
        assert calculate_update_confidence(relation, 3) == pytest.approx(0.6)
