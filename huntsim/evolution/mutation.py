"""Mutation operations for genetic variation.

Mutations introduce random variation into offspring when a new cohort is bred.
Every mutable gene rolls independently against ``mutation_chance`` (a percent)
and, on success, shifts by a uniform delta in ``[-mutation_factor,
+mutation_factor]``.

Mutation Types:
- Continuous genes: uniform additive shift, clamped to a floor where one exists
- Discrete genes (ray radius): the drawn delta is truncated toward zero
- Coupled genes: growing sight costs speed and growing speed costs sight

Mutation happens exactly once, at birth. An agent's genome never changes while
it is alive.
"""

import random
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from huntsim.config.agents import MIN_MOVEMENT_SPEED, MIN_RAY_RADIUS, MIN_SIGHT_RANGE
from huntsim.config.evolution import (
    DEFAULT_MUTATION_CHANCE,
    DEFAULT_MUTATION_FACTOR,
    SIGHT_INFLUENCE_ON_SPEED,
    SPEED_INFLUENCE_ON_SIGHT,
)
from huntsim.exceptions import GeneticsError
from huntsim.genetics import AgentGenome, GenePair


@dataclass
class MutationConfig:
    """Configuration for mutation operations.

    Attributes:
        mutation_factor: Half-width of the uniform delta added to a gene
        mutation_chance: Percent chance (0-100) that a given gene mutates
    """

    mutation_factor: float = DEFAULT_MUTATION_FACTOR
    mutation_chance: float = DEFAULT_MUTATION_CHANCE

    def __post_init__(self) -> None:
        if not 0.0 <= self.mutation_chance <= 100.0:
            raise GeneticsError(
                f"mutation_chance must be a percent in [0, 100], got {self.mutation_chance}"
            )
        if self.mutation_factor < 0.0:
            raise GeneticsError(f"mutation_factor must be >= 0, got {self.mutation_factor}")


# Default configuration
DEFAULT_MUTATION_CONFIG = MutationConfig()


def roll_delta(
    mutation_factor: float,
    mutation_chance: float,
    rng: random.Random,
) -> float:
    """Roll one gene: return the delta to add, or 0.0 if the gene is untouched.

    Args:
        mutation_factor: Half-width of the uniform delta
        mutation_chance: Percent chance of mutating
        rng: Random number generator

    Returns:
        Delta in ``[-mutation_factor, +mutation_factor]`` or 0.0
    """
    if rng.random() * 100.0 < mutation_chance:
        return rng.uniform(-mutation_factor, mutation_factor)
    return 0.0


def mutate_discrete_gene(
    value: int,
    min_val: int,
    mutation_factor: float,
    mutation_chance: float,
    rng: random.Random,
) -> int:
    """Mutate an integer gene; the drawn delta is truncated toward zero."""
    value += int(roll_delta(mutation_factor, mutation_chance, rng))
    return max(min_val, value)


def mutate_pair(
    pair: GenePair,
    mutation_factor: float,
    mutation_chance: float,
    rng: random.Random,
) -> GenePair:
    """Mutate weight then distance factor, independently and without bounds."""
    weight = pair.weight + roll_delta(mutation_factor, mutation_chance, rng)
    distance_factor = pair.distance_factor + roll_delta(mutation_factor, mutation_chance, rng)
    return GenePair(weight=weight, distance_factor=distance_factor)


def mutate_sight_and_speed(
    sight_range: float,
    movement_speed: float,
    mutation_factor: float,
    mutation_chance: float,
    rng: random.Random,
) -> Tuple[float, float]:
    """Mutate the coupled sensing/locomotion genes.

    Sight rolls first. A positive sight delta is paid for with speed, then
    speed rolls and a positive speed delta is paid for with sight. Floors are
    re-applied after every adjustment.

    Returns:
        Tuple of (sight_range, movement_speed)
    """
    sight_delta = roll_delta(mutation_factor, mutation_chance, rng)
    sight_range = max(sight_range + sight_delta, MIN_SIGHT_RANGE)
    if sight_delta > 0.0:
        movement_speed -= sight_delta * SIGHT_INFLUENCE_ON_SPEED
        movement_speed = max(movement_speed, MIN_MOVEMENT_SPEED)

    speed_delta = roll_delta(mutation_factor, mutation_chance, rng)
    movement_speed = max(movement_speed + speed_delta, MIN_MOVEMENT_SPEED)
    if speed_delta > 0.0:
        sight_range -= speed_delta * SPEED_INFLUENCE_ON_SIGHT
        sight_range = max(sight_range, MIN_SIGHT_RANGE)

    return sight_range, movement_speed


class MutationOperator:
    """Produces a mutated copy of a parent genome.

    Example:
        operator = MutationOperator(MutationConfig(mutation_factor=0.5, mutation_chance=20))
        child = operator.mutate(parent_genome, rng)
    """

    def __init__(self, config: Optional[MutationConfig] = None) -> None:
        self.config = config or DEFAULT_MUTATION_CONFIG

    def mutate(self, genome: AgentGenome, rng: random.Random) -> AgentGenome:
        """Return a new genome derived from ``genome``; the input is untouched.

        Genes roll in a fixed order so a seeded ``rng`` reproduces the same
        offspring: ray radius, sight, speed, both utility bounds, then the
        prey, predator A and predator B gene pairs.
        """
        factor = self.config.mutation_factor
        chance = self.config.mutation_chance

        ray_radius = mutate_discrete_gene(genome.ray_radius, MIN_RAY_RADIUS, factor, chance, rng)
        sight_range, movement_speed = mutate_sight_and_speed(
            genome.sight_range, genome.movement_speed, factor, chance, rng
        )
        low, high = genome.random_utility_range
        low += roll_delta(factor, chance, rng)
        high += roll_delta(factor, chance, rng)

        return replace(
            genome,
            ray_radius=ray_radius,
            sight_range=sight_range,
            movement_speed=movement_speed,
            random_utility_range=(low, high),
            prey=mutate_pair(genome.prey, factor, chance, rng),
            predator_a=mutate_pair(genome.predator_a, factor, chance, rng),
            predator_b=mutate_pair(genome.predator_b, factor, chance, rng),
        )
