"""Evolution module for the hunting simulation.

Selection here is an explicit fitness function. Every generation is a timed
trial; agents collect score from interactions and the best performers seed the
next cohort.

The module consolidates:
- Mutation: Random variations applied once at birth
- Selection: Fitness ranking and truncation to a parent pool
"""

from huntsim.evolution.mutation import (
    DEFAULT_MUTATION_CONFIG,
    MutationConfig,
    MutationOperator,
    mutate_discrete_gene,
    mutate_pair,
    mutate_sight_and_speed,
    roll_delta,
)
from huntsim.evolution.selection import best_genome, choose_parent, rank_by_fitness, truncate

__all__ = [
    # Mutation
    "MutationOperator",
    "MutationConfig",
    "DEFAULT_MUTATION_CONFIG",
    "roll_delta",
    "mutate_discrete_gene",
    "mutate_pair",
    "mutate_sight_and_speed",
    # Selection
    "rank_by_fitness",
    "truncate",
    "choose_parent",
    "best_genome",
]
