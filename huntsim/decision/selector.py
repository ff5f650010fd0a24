"""Direction selection with bounded randomness.

The best-scored direction wins most of the time; otherwise the runner-up is
taken. The occasional second choice keeps agents from locking into an
oscillation when two directions score almost the same.
"""

import random
from typing import List, Sequence

from huntsim.config.agents import BEST_DIRECTION_CHANCE
from huntsim.decision.utility import ScoredDirection
from huntsim.exceptions import DecisionError


class DirectionSelector:
    def __init__(self, best_chance: float = BEST_DIRECTION_CHANCE) -> None:
        self.best_chance = best_chance

    def rank(self, candidates: Sequence[ScoredDirection]) -> List[ScoredDirection]:
        """Stable sort, highest utility first."""
        return sorted(candidates, key=lambda candidate: candidate.utility, reverse=True)

    def select(self, candidates: Sequence[ScoredDirection], rng: random.Random) -> ScoredDirection:
        """Pick rank 0 if a ``[0, 100)`` draw is <= the best chance, else rank 1.

        Raises:
            DecisionError: If fewer than two candidates are given
        """
        if len(candidates) < 2:
            raise DecisionError(
                f"Direction selection needs at least 2 candidates, got {len(candidates)}"
            )
        ranked = self.rank(candidates)
        roll = rng.random() * 100.0
        return ranked[0] if roll <= self.best_chance else ranked[1]
