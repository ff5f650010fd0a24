"""Genome class for hunting agents.

An ``AgentGenome`` holds every heritable parameter that governs how an agent
perceives the world, scores candidate directions and moves. Genomes are frozen:
an agent keeps the same genome for its whole lifetime and offspring always get
a fresh instance.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Dict, Tuple

from huntsim.config.agents import (
    DEFAULT_MOVEMENT_SPEED,
    DEFAULT_RANDOM_UTILITY_RANGE,
    DEFAULT_RAY_RADIUS,
    DEFAULT_SIGHT_RANGE,
    FULL_TURN_DEGREES,
    MIN_MOVEMENT_SPEED,
    MIN_RAY_RADIUS,
    MIN_SIGHT_RANGE,
)
from huntsim.species import ObjectTag


@dataclass(frozen=True)
class GenePair:
    """Weight and distance factor an agent applies to one opposing species."""

    weight: float = 0.0
    distance_factor: float = 0.0

    def score(self, distance_index: float) -> float:
        return distance_index * self.distance_factor + self.weight


@dataclass(frozen=True)
class AgentGenome:
    """Heritable parameter vector of one agent.

    Attributes:
        ray_radius: Number of angular steps in the perception fan
        sight_range: Probe length; the forward probe reaches 1.5x further
        movement_speed: Horizontal speed along the chosen direction
        random_utility_range: Bounds of the baseline utility draw (any order)
        prey: Gene pair applied to prey hits
        predator_a: Gene pair applied to predator A hits
        predator_b: Gene pair applied to predator B hits
    """

    ray_radius: int = DEFAULT_RAY_RADIUS
    sight_range: float = DEFAULT_SIGHT_RANGE
    movement_speed: float = DEFAULT_MOVEMENT_SPEED
    random_utility_range: Tuple[float, float] = DEFAULT_RANDOM_UTILITY_RANGE
    prey: GenePair = field(default_factory=GenePair)
    predator_a: GenePair = field(default_factory=GenePair)
    predator_b: GenePair = field(default_factory=GenePair)

    def __post_init__(self) -> None:
        # Floors are enforced here so no genome can reach the fan computation
        # with a zero ray radius.
        ray_radius = max(int(self.ray_radius), MIN_RAY_RADIUS)
        sight_range = max(float(self.sight_range), MIN_SIGHT_RANGE)
        movement_speed = max(float(self.movement_speed), MIN_MOVEMENT_SPEED)
        low, high = self.random_utility_range
        object.__setattr__(self, "ray_radius", ray_radius)
        object.__setattr__(self, "sight_range", sight_range)
        object.__setattr__(self, "movement_speed", movement_speed)
        object.__setattr__(self, "random_utility_range", (float(low), float(high)))

    @property
    def step_degrees(self) -> float:
        """Angular step between fan probes, derived from ``ray_radius``."""
        return FULL_TURN_DEGREES / self.ray_radius

    @property
    def utility_bounds(self) -> Tuple[float, float]:
        """Baseline utility bounds ordered as (min, max)."""
        a, b = self.random_utility_range
        return min(a, b), max(a, b)

    def pair_for(self, tag: ObjectTag) -> GenePair:
        """Look up the gene pair for a species tag.

        Raises:
            KeyError: If the tag does not denote a species
        """
        return {
            ObjectTag.PREY: self.prey,
            ObjectTag.PREDATOR_A: self.predator_a,
            ObjectTag.PREDATOR_B: self.predator_b,
        }[tag]

    def copy(self) -> "AgentGenome":
        """Return an independent value copy for a newborn agent."""
        return replace(self)

    def debug_snapshot(self) -> Dict[str, object]:
        """Return a compact, stable dict for logging/debugging."""
        snapshot: Dict[str, object] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, GenePair):
                snapshot[f.name] = (round(value.weight, 3), round(value.distance_factor, 3))
            elif isinstance(value, float):
                snapshot[f.name] = round(value, 3)
            else:
                snapshot[f.name] = value
        return snapshot
