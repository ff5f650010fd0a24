"""Per-species population management.

A ``PopulationController`` owns the live agents of one species together with
its parent pool. At a generation boundary the scheduler drives it through an
explicit pipeline:

1. ``rank``: drop despawned agents, re-seed if nothing is left, then sort
2. ``select``: truncate the ranking to the parent pool and record the winner
3. ``breed``: spawn the next cohort from the parent pool

Nothing is sorted in place and nothing ranked is cached between ticks.
"""

from __future__ import annotations

import itertools
import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Iterator, List, Optional, Sequence, Tuple

from huntsim.agent import Agent
from huntsim.config.simulation_config import SpeciesConfig
from huntsim.evolution import MutationOperator, choose_parent, rank_by_fitness, truncate
from huntsim.genetics import AgentGenome
from huntsim.movement import MotionController
from huntsim.species import Species
from huntsim.world import Body

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRecord:
    """Outcome of selection for one species in one generation.

    Attributes:
        generation: Index of the generation that ended
        species: Species that was ranked
        parent_pool: Value copies of the selected genomes, best first
        best_genome: Copy of the rank-0 genome
        best_fitness: Fitness of the rank-0 agent
        label: Generation-qualified label of the winner
    """

    generation: int
    species: Species
    parent_pool: Tuple[AgentGenome, ...]
    best_genome: AgentGenome
    best_fitness: float
    label: str


class Population:
    """Unordered collection of the live agents of one species."""

    def __init__(self, species: Species) -> None:
        self.species = species
        self._agents: List[Agent] = []

    def add(self, agent: Agent) -> None:
        self._agents.append(agent)

    def members(self) -> List[Agent]:
        """Return a snapshot list; mutating it does not affect the population."""
        return list(self._agents)

    def prune_despawned(self) -> List[Agent]:
        """Remove despawned agents and return them."""
        removed = [agent for agent in self._agents if agent.despawned]
        if removed:
            self._agents = [agent for agent in self._agents if not agent.despawned]
        return removed

    def clear(self) -> List[Agent]:
        old = self._agents
        self._agents = []
        return old

    def ranked(self) -> List[Agent]:
        """Fresh ranking, best first; never cached."""
        return rank_by_fitness(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(list(self._agents))

    def __repr__(self) -> str:
        return f"Population(species={self.species.value}, size={len(self._agents)})"


class PopulationController:
    """Owns one species' population, parent pool and generation history."""

    def __init__(
        self,
        config: SpeciesConfig,
        mutation: MutationOperator,
        next_id: Callable[[], int],
        history_limit: int = 100,
    ) -> None:
        self.config = config
        self.mutation = mutation
        self._next_id = next_id
        self.population = Population(config.species)
        self.parent_pool: Tuple[AgentGenome, ...] = ()
        self.last_winner: Optional[GenerationRecord] = None
        self.history: Deque[GenerationRecord] = deque(maxlen=history_limit)

    @property
    def species(self) -> Species:
        return self.config.species

    @property
    def evolving(self) -> bool:
        """Whether this species goes through ranking and selection."""
        return not self.config.static

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def seed(
        self,
        rng: random.Random,
        genomes: Optional[Sequence[AgentGenome]] = None,
        awake: bool = True,
    ) -> List[Agent]:
        """Spawn a first cohort from explicit genomes (cycled) or the default genome."""
        if genomes:
            supplied = itertools.cycle(list(genomes))

            def factory() -> AgentGenome:
                return next(supplied).copy()

        else:

            def factory() -> AgentGenome:
                return self.config.default_genome.copy()

        return self._spawn(rng, factory, awake)

    def breed(self, rng: random.Random, awake: bool = True) -> List[Agent]:
        """Spawn the next cohort from the parent pool.

        Static species ignore the pool and respawn from their default genome.
        Without a pool every child starts from the default genome. Children
        are mutated when evolution is enabled for the species.
        """
        if self.config.static:
            return self.seed(rng, awake=awake)
        if not self.parent_pool:
            logger.debug("%s: no parent pool, breeding from default genome", self.species.value)

        def factory() -> AgentGenome:
            genome = choose_parent(self.parent_pool, self.config.default_genome, rng)
            if self.config.evolution_enabled:
                genome = self.mutation.mutate(genome, rng)
            return genome

        return self._spawn(rng, factory, awake)

    def _spawn(
        self,
        rng: random.Random,
        genome_factory: Callable[[], AgentGenome],
        awake: bool,
    ) -> List[Agent]:
        # A spawner that raises leaves the previous cohort in place.
        bodies: List[Body] = self.config.spawner.regenerate_objects(self.config.cohort_size, rng)

        # The spawner replaced its previous cohort, so the old agents go too.
        for old in self.population.clear():
            old.mark_despawned()

        spawned: List[Agent] = []
        for body in bodies:
            agent = Agent(self._next_id(), self.species, genome_factory(), body)
            if awake and self.config.acts:
                agent.wake()
            self.population.add(agent)
            spawned.append(agent)

        logger.debug(
            "%s: spawned %d/%d agents", self.species.value, len(spawned), self.config.cohort_size
        )
        return spawned

    # ------------------------------------------------------------------
    # Generation boundary
    # ------------------------------------------------------------------

    def rank(self, rng: random.Random) -> List[Agent]:
        """Prune, guard against an empty population, then rank by fitness.

        An empty population is re-seeded from the current parent pool (or the
        default genome) before ranking. Returns an empty list only when even
        the re-seed produced no agents.
        """
        removed = self.population.prune_despawned()
        if removed:
            logger.debug("%s: pruned %d despawned agents", self.species.value, len(removed))

        if len(self.population) == 0:
            logger.warning(
                "%s: population empty at ranking, re-seeding from %s",
                self.species.value,
                "parent pool" if self.parent_pool else "default genome",
            )
            self.breed(rng)

        if len(self.population) == 0:
            return []
        return self.population.ranked()

    def select(self, ranked: Sequence[Agent], generation: int) -> GenerationRecord:
        """Truncate ``ranked`` to the parent pool and record the winner.

        Raises:
            ValueError: If ``ranked`` is empty; callers must rank first
        """
        if not ranked:
            raise ValueError(f"{self.species.value}: cannot select from an empty ranking")

        pool = tuple(truncate(ranked, self.config.parent_size))
        winner = ranked[0]
        record = GenerationRecord(
            generation=generation,
            species=self.species,
            parent_pool=pool,
            best_genome=winner.genome.copy(),
            best_fitness=winner.fitness,
            label=f"{winner.label}Gen-{generation}",
        )
        self.parent_pool = pool
        self.last_winner = record
        self.history.append(record)
        return record

    # ------------------------------------------------------------------
    # Suspension
    # ------------------------------------------------------------------

    def sleep_all(self, motion: MotionController) -> None:
        for agent in self.population:
            agent.sleep(motion)

    def wake_all(self) -> None:
        if not self.config.acts:
            return
        for agent in self.population:
            agent.wake()

    def find_by_body(self, body: Body) -> Optional[Agent]:
        for agent in self.population:
            if agent.body is body:
                return agent
        return None

    def __repr__(self) -> str:
        return (
            f"PopulationController(species={self.species.value}, "
            f"size={len(self.population)}, parents={len(self.parent_pool)})"
        )
