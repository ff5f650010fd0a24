"""Tests for the payoff table and fitness accumulation."""

import pytest

from huntsim.fitness import (
    NO_PAYOFF,
    FitnessAccumulator,
    InteractionKind,
    Payoff,
    payoff_for,
)
from huntsim.species import Species

CONTACT = InteractionKind.CONTACT
COLLISION = InteractionKind.COLLISION


class TestPayoffTable:
    def test_predator_a_eats_prey(self):
        assert payoff_for(Species.PREDATOR_A, Species.PREY, CONTACT) == Payoff(2.0, True)

    def test_predator_a_hit_by_predator_b(self):
        assert payoff_for(Species.PREDATOR_A, Species.PREDATOR_B, COLLISION) == Payoff(-100.0, False)

    def test_predator_b_eats_prey(self):
        assert payoff_for(Species.PREDATOR_B, Species.PREY, CONTACT) == Payoff(0.1, True)

    def test_predator_b_catches_predator_a(self):
        assert payoff_for(Species.PREDATOR_B, Species.PREDATOR_A, COLLISION) == Payoff(5.0, True)

    @pytest.mark.parametrize(
        "this, other, kind",
        [
            (Species.PREY, Species.PREDATOR_A, CONTACT),
            (Species.PREDATOR_A, Species.PREY, COLLISION),
            (Species.PREDATOR_A, Species.PREDATOR_A, COLLISION),
            (Species.PREDATOR_B, Species.PREDATOR_A, CONTACT),
        ],
    )
    def test_unlisted_interactions_do_nothing(self, this, other, kind):
        assert payoff_for(this, other, kind) is NO_PAYOFF

    def test_custom_table_replaces_defaults(self):
        table = {(Species.PREY, Species.PREDATOR_A, CONTACT): Payoff(-1.0)}
        assert payoff_for(Species.PREY, Species.PREDATOR_A, CONTACT, table).delta == -1.0
        assert payoff_for(Species.PREDATOR_A, Species.PREY, CONTACT, table) is NO_PAYOFF


class TestFitnessAccumulator:
    def test_starts_at_zero(self):
        assert FitnessAccumulator().score == 0.0

    def test_deltas_sum(self):
        acc = FitnessAccumulator()
        acc.apply(Payoff(2.0))
        acc.apply(Payoff(2.0))
        assert acc.apply(Payoff(-100.0)) == pytest.approx(-96.0)
        assert acc.event_count == 3

    def test_zero_delta_is_not_counted(self):
        acc = FitnessAccumulator()
        acc.apply(NO_PAYOFF)
        assert acc.event_count == 0
        assert acc.score == 0.0
