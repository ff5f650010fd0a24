"""Gene-weighted utility scoring of perception samples.

Every probe direction starts with a random baseline utility so that an agent
with nothing in sight still wanders. A hit replaces the baseline with a score
that depends on what was hit:

- Species (prey, predator A, predator B): ``distance_index * distance_factor
  + weight`` using the agent's gene pair for that species
- Obstacles: a flat -1
- Cover: an ambush-risk term that is negative only when a predator B lurks
  behind the agent, scaled by the agent's own predator B weight
"""

import random
from dataclasses import dataclass
from typing import List, Optional

from huntsim.config.agents import (
    AMBUSH_DOT_THRESHOLD,
    AMBUSH_PENALTY,
    COVER_SCAN_RADIUS,
    OBSTACLE_UTILITY,
)
from huntsim.genetics import AgentGenome
from huntsim.math_utils import Vector3
from huntsim.perception import PerceptionSample
from huntsim.species import ObjectTag, species_for_tag
from huntsim.world import WorldQuery

AMBUSH_PREDATOR_TAG = ObjectTag.PREDATOR_B


@dataclass(frozen=True)
class ScoredDirection:
    """A candidate movement direction and its utility."""

    direction: Vector3
    utility: float
    tag: ObjectTag = ObjectTag.NONE


def distance_index(distance: float, effective_range: float) -> float:
    """Map a hit distance to [0, 1]; 1 at the agent, 0 at the edge of range."""
    if effective_range <= 0:
        return 0.0
    return max(0.0, min(1.0, 1.0 - distance / effective_range))


class UtilityEvaluator:
    """Scores perception samples for one agent."""

    def __init__(
        self,
        cover_scan_radius: float = COVER_SCAN_RADIUS,
        ambush_penalty: float = AMBUSH_PENALTY,
    ) -> None:
        self.cover_scan_radius = cover_scan_radius
        self.ambush_penalty = ambush_penalty

    def evaluate(
        self,
        samples: List[PerceptionSample],
        genome: AgentGenome,
        world: WorldQuery,
        position: Vector3,
        forward: Vector3,
        rng: random.Random,
    ) -> List[ScoredDirection]:
        """Score every sample, preserving sample order.

        One baseline utility is drawn per sample, in order, whether or not the
        sample hit anything.
        """
        low, high = genome.utility_bounds
        ambush_term: Optional[float] = None
        scored: List[ScoredDirection] = []

        for sample in samples:
            utility = rng.uniform(low, high)
            if sample.hit:
                if species_for_tag(sample.tag) is not None:
                    index = distance_index(sample.distance, sample.effective_range)
                    utility = genome.pair_for(sample.tag).score(index)
                elif sample.tag is ObjectTag.OBSTACLE:
                    utility = OBSTACLE_UTILITY
                elif sample.tag is ObjectTag.COVER:
                    if ambush_term is None:
                        ambush_term = self.ambush_risk(world, position, forward)
                    utility = ambush_term * genome.predator_b.weight
            scored.append(
                ScoredDirection(
                    direction=sample.direction.flattened(),
                    utility=utility,
                    tag=sample.tag,
                )
            )
        return scored

    def ambush_risk(self, world: WorldQuery, position: Vector3, forward: Vector3) -> float:
        """Return the ambush penalty if a predator B sits behind the agent, else 0.

        "Behind" means the unit vector toward the predator makes a dot
        product below -0.5 with the agent's forward vector.
        """
        for overlap in world.overlap_sphere(position, self.cover_scan_radius):
            if overlap.tag is not AMBUSH_PREDATOR_TAG:
                continue
            to_predator = (overlap.position - position).normalize()
            if forward.dot(to_predator) < AMBUSH_DOT_THRESHOLD:
                return self.ambush_penalty
        return 0.0
