"""Fitness accumulation from world interactions.

Scoring is a pure lookup: ``payoff_for(this, other, kind)`` returns how much
an agent of species ``this`` gains from an interaction of ``kind`` with a
``other`` and whether the other party is consumed. The accumulator just adds
the deltas up.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from huntsim.config.evolution import (
    PREDATOR_A_PREDATOR_B_PAYOFF,
    PREDATOR_A_PREY_PAYOFF,
    PREDATOR_B_PREDATOR_A_PAYOFF,
    PREDATOR_B_PREY_PAYOFF,
)
from huntsim.species import Species


class InteractionKind(Enum):
    """How two objects met."""

    CONTACT = "contact"  # Trigger overlap, e.g. reaching prey
    COLLISION = "collision"  # Solid-body collision


@dataclass(frozen=True)
class Payoff:
    """Outcome of an interaction for the reporting agent.

    Attributes:
        delta: Fitness change for the reporting agent
        consumes_other: Whether the other party is removed from the world
    """

    delta: float = 0.0
    consumes_other: bool = False


PayoffKey = Tuple[Species, Species, InteractionKind]
PayoffTable = Mapping[PayoffKey, Payoff]

NO_PAYOFF = Payoff()

DEFAULT_PAYOFFS: Dict[PayoffKey, Payoff] = {
    (Species.PREDATOR_A, Species.PREY, InteractionKind.CONTACT): Payoff(
        PREDATOR_A_PREY_PAYOFF, consumes_other=True
    ),
    (Species.PREDATOR_A, Species.PREDATOR_B, InteractionKind.COLLISION): Payoff(
        PREDATOR_A_PREDATOR_B_PAYOFF
    ),
    (Species.PREDATOR_B, Species.PREY, InteractionKind.CONTACT): Payoff(
        PREDATOR_B_PREY_PAYOFF, consumes_other=True
    ),
    (Species.PREDATOR_B, Species.PREDATOR_A, InteractionKind.COLLISION): Payoff(
        PREDATOR_B_PREDATOR_A_PAYOFF, consumes_other=True
    ),
}


def payoff_for(
    this: Species,
    other: Species,
    kind: InteractionKind,
    table: Optional[PayoffTable] = None,
) -> Payoff:
    """Look up the payoff; unlisted combinations are a zero-delta no-op."""
    payoffs = DEFAULT_PAYOFFS if table is None else table
    return payoffs.get((this, other, kind), NO_PAYOFF)


class FitnessAccumulator:
    """Running fitness score of one agent.

    Starts at 0 when the agent spawns and only moves through ``apply``. There
    is no reset: a new generation gets new agents, and with them new
    accumulators.
    """

    __slots__ = ("_score", "_events")

    def __init__(self) -> None:
        self._score = 0.0
        self._events = 0

    @property
    def score(self) -> float:
        return self._score

    @property
    def event_count(self) -> int:
        """Number of interactions that changed the score."""
        return self._events

    def apply(self, payoff: Payoff) -> float:
        """Add a payoff's delta and return the new score."""
        if payoff.delta:
            self._score += payoff.delta
            self._events += 1
        return self._score

    def __repr__(self) -> str:
        return f"FitnessAccumulator(score={self._score})"
