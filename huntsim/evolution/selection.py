"""Truncation selection over a ranked population.

Selection is single-criterion: agents are ordered by accumulated fitness and
the top ``parent_size`` genomes become the entire breeding pool.
"""

import random
from typing import TYPE_CHECKING, List, Optional, Sequence

from huntsim.genetics import AgentGenome

if TYPE_CHECKING:
    from huntsim.agent import Agent


def rank_by_fitness(agents: Sequence["Agent"]) -> List["Agent"]:
    """Return a new list sorted descending by fitness.

    ``sorted`` is stable, so ties keep their population order.
    """
    return sorted(agents, key=lambda agent: agent.fitness, reverse=True)


def truncate(ranked: Sequence["Agent"], parent_size: int) -> List[AgentGenome]:
    """Copy the genomes of the top ``parent_size`` ranked agents.

    If fewer agents are alive than ``parent_size`` the pool is simply smaller.
    """
    return [agent.genome.copy() for agent in ranked[: max(parent_size, 0)]]


def choose_parent(
    parent_pool: Sequence[AgentGenome],
    default: AgentGenome,
    rng: random.Random,
) -> AgentGenome:
    """Pick a parent uniformly from the pool, or the default when it is empty."""
    if not parent_pool:
        return default.copy()
    return parent_pool[rng.randrange(len(parent_pool))].copy()


def best_genome(ranked: Sequence["Agent"]) -> Optional[AgentGenome]:
    if not ranked:
        return None
    return ranked[0].genome.copy()
