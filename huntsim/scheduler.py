"""Generation scheduler: the top-level driver of a generational run.

The scheduler owns one ``PopulationController`` per configured species and a
state machine that sequences the run:

- ``start_simulation()`` seeds every species and starts the clock
- ``tick(dt)`` runs the decision cycle of every awake agent and advances the
  simulated clock; when a generation interval elapses it ranks, selects and
  breeds every species before returning
- ``stop_simulation()`` / ``continue_simulation()`` suspend and resume
- ``handle_interaction()`` / ``report_despawn()`` are how the host world
  reports collisions, captures and removals

Everything is single-threaded. A generation transition runs to completion
inside one call; re-entrant ticks or reports during it are rejected. Host
callbacks that fail mid-transition (a spawner, an event handler) are logged
and the transition still ends in RUNNING.
"""

from __future__ import annotations

import itertools
import logging
import random
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Set, Union

from huntsim.agent import Agent, DecisionCycle
from huntsim.config.simulation_config import SimulationConfig
from huntsim.events import (
    AgentDespawnedEvent,
    EventBus,
    GenerationCompletedEvent,
    InteractionAppliedEvent,
    SimulationStateChangedEvent,
)
from huntsim.evolution import MutationOperator
from huntsim.exceptions import ConfigurationError, InvalidStateError, PersistenceError
from huntsim.fitness import NO_PAYOFF, InteractionKind, Payoff, payoff_for
from huntsim.genetics import AgentGenome
from huntsim.population import GenerationRecord, PopulationController
from huntsim.species import Species
from huntsim.state_machine import (
    TRANSITION_STATES,
    SimulationState,
    StateTransition,
    create_simulation_state_machine,
)
from huntsim.world import Body, GenomeStore, WorldQuery

logger = logging.getLogger(__name__)


class GenerationScheduler:
    """Drives timed generations across all configured species."""

    def __init__(
        self,
        config: SimulationConfig,
        world: WorldQuery,
        store: Optional[GenomeStore] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
        cycle: Optional[DecisionCycle] = None,
    ) -> None:
        config.validate()
        self.config = config
        self.world = world
        self.store = store
        self.rng = rng or random.Random(config.reseed_value)
        self.event_bus = event_bus or EventBus()
        self.cycle = cycle or DecisionCycle()

        self._machine = create_simulation_state_machine()
        self._ids = itertools.count(1)
        mutation = MutationOperator(config.mutation)
        self.controllers: Dict[Species, PopulationController] = {
            species: PopulationController(
                species_config,
                mutation,
                next_id=lambda: next(self._ids),
                history_limit=config.history_limit,
            )
            for species, species_config in config.species.items()
        }

        self.generation = config.initial_generation
        self.elapsed = 0.0
        self.frame = 0
        # Agents despawned since the current frame began still score that frame.
        self._despawned_this_frame: Set[int] = set()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> SimulationState:
        return self._machine.state

    @property
    def running(self) -> bool:
        return self._machine.state is SimulationState.RUNNING

    @property
    def history(self) -> List[StateTransition[SimulationState]]:
        return self._machine.history

    def controller(self, species: Species) -> PopulationController:
        try:
            return self.controllers[species]
        except KeyError:
            raise ConfigurationError(f"Species {species.value} is not configured") from None

    def agents(self, species: Optional[Species] = None) -> List[Agent]:
        """Live agents of one species, or of all species."""
        if species is not None:
            return self.controller(species).population.members()
        return [agent for ctrl in self.controllers.values() for agent in ctrl.population]

    def last_winner(self, species: Species) -> Optional[GenerationRecord]:
        return self.controller(species).last_winner

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def setup(self) -> None:
        """Start immediately when the config asks for it."""
        if self.config.run_on_start and self.state is SimulationState.IDLE:
            self.start_simulation()

    def start_simulation(
        self, genomes: Optional[Mapping[Species, Sequence[AgentGenome]]] = None
    ) -> None:
        """Seed every species and start the generation clock.

        Args:
            genomes: Optional explicit starting genomes per species; species
                without an entry start from their default genome.

        Raises:
            InvalidStateError: If the simulation was already started
        """
        self._require(SimulationState.SEEDING)
        self._transition(SimulationState.SEEDING, "start")
        self._reseed()
        for species, ctrl in self.controllers.items():
            chosen = (genomes or {}).get(species)
            self._guard_spawn(species, "seeding", lambda c=ctrl, g=chosen: c.seed(self.rng, g))
        self.elapsed = 0.0
        self._transition(SimulationState.RUNNING, "seeded")
        logger.info(
            "Simulation started at generation %d with %s",
            self.generation,
            ", ".join(f"{len(c.population)} {s.value}" for s, c in self.controllers.items()),
        )

    def stop_simulation(self) -> None:
        """Suspend every agent; populations are kept for ``continue_simulation``."""
        self._require(SimulationState.STOPPED)
        self._transition(SimulationState.STOPPED, "stop")
        for ctrl in self.controllers.values():
            ctrl.sleep_all(self.cycle.motion)
        logger.info("Simulation stopped at generation %d", self.generation)

    def continue_simulation(self, advance_generation: bool = False) -> None:
        """Resume a stopped simulation.

        Args:
            advance_generation: Run a full rank/select/breed transition first
                instead of waking the suspended cohort. Also accepted while
                running, to end the current generation early.
        """
        if advance_generation and self.state in (SimulationState.STOPPED, SimulationState.RUNNING):
            self.elapsed = 0.0
            self._advance_generation("manual")
            return

        self._require(SimulationState.RUNNING)
        if self.state is not SimulationState.STOPPED:
            raise InvalidStateError(
                f"continue_simulation() needs a stopped simulation, state is {self.state.name}"
            )
        self._transition(SimulationState.RUNNING, "continue")
        for ctrl in self.controllers.values():
            ctrl.wake_all()
        logger.info("Simulation resumed at generation %d", self.generation)

    def generate_species(
        self, species: Species, genomes: Optional[Sequence[AgentGenome]] = None
    ) -> List[Agent]:
        """Regenerate one species' cohort outside the generation clock.

        Evolving species breed from their parent pool when they have one;
        otherwise (and for static species) the cohort comes from ``genomes``
        or the default genome. New agents are awake only while running.
        """
        if self.state in TRANSITION_STATES:
            raise InvalidStateError(
                f"Cannot generate {species.value} during {self.state.name}"
            )
        ctrl = self.controller(species)
        awake = self.running
        if ctrl.evolving and ctrl.parent_pool and not genomes:
            return ctrl.breed(self.rng, awake=awake)
        return ctrl.seed(self.rng, genomes, awake=awake)

    # ------------------------------------------------------------------
    # Tick loop
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> int:
        """Advance the simulation by ``dt`` simulated seconds.

        Returns:
            Number of agents that ran their decision cycle. Zero when the
            simulation is idle or stopped.

        Raises:
            InvalidStateError: If called while a generation transition runs
        """
        if self.state in TRANSITION_STATES:
            raise InvalidStateError(f"tick() during {self.state.name}")
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        if not self.running:
            return 0

        self.frame += 1
        self._despawned_this_frame.clear()
        ticked = 0
        for ctrl in self.controllers.values():
            if not ctrl.config.acts:
                continue
            for agent in ctrl.population:
                if agent.tick(self.cycle, self.world, self.rng) is not None:
                    ticked += 1

        self.elapsed += dt
        if self.elapsed >= self.config.simulation_interval:
            self.elapsed -= self.config.simulation_interval
            self._advance_generation("timer")
        return ticked

    # ------------------------------------------------------------------
    # World reports
    # ------------------------------------------------------------------

    def handle_interaction(
        self,
        agent: Agent,
        other_species: Species,
        kind: InteractionKind,
        other: Optional[Union[Agent, Body]] = None,
    ) -> Payoff:
        """Apply the payoff for ``agent`` meeting an object of ``other_species``.

        When the payoff consumes the other party and ``other`` is given, it is
        despawned as well. An agent despawned earlier in the current frame is
        still scored, so two reports of the same collision give the same result
        in either order; from the next frame on it scores nothing.
        """
        self._reject_during_transition("handle_interaction")
        if agent.despawned and agent.agent_id not in self._despawned_this_frame:
            return NO_PAYOFF

        payoff = payoff_for(agent.species, other_species, kind, self.config.payoffs)
        fitness = agent.record_interaction(payoff)
        consumed = payoff.consumes_other and other is not None
        if consumed:
            self.report_despawn(other, reason="consumed")

        self.event_bus.emit(
            InteractionAppliedEvent(
                agent_id=agent.agent_id,
                species=agent.species,
                other_species=other_species,
                kind=kind,
                delta=payoff.delta,
                fitness=fitness,
                consumed_other=consumed,
            )
        )
        return payoff

    def report_despawn(
        self, target: Union[Agent, Body], reason: str = "despawned"
    ) -> Optional[Agent]:
        """Mark the agent (or the agent owning ``target`` body) as gone.

        The agent stays in its population until the next ranking prunes it.
        Returns the agent, or None if ``target`` is not tracked.
        """
        self._reject_during_transition("report_despawn")
        agent = target if isinstance(target, Agent) else self._find_agent(target)
        if agent is None or agent.despawned:
            return None

        agent.mark_despawned()
        self._despawned_this_frame.add(agent.agent_id)
        logger.debug("%s %s: %s", agent.species.value, agent.label, reason)
        self.event_bus.emit(
            AgentDespawnedEvent(
                agent_id=agent.agent_id,
                species=agent.species,
                fitness=agent.fitness,
                reason=reason,
            )
        )
        return agent

    # ------------------------------------------------------------------
    # Generation transition
    # ------------------------------------------------------------------

    def _advance_generation(self, reason: str) -> None:
        self._transition(SimulationState.RANKING, reason)
        self.generation += 1
        self._reseed()
        rankings: Dict[Species, List[Agent]] = {}
        for species, ctrl in self.controllers.items():
            if ctrl.evolving:
                result = self._guard_spawn(species, "ranking", lambda c=ctrl: c.rank(self.rng))
                rankings[species] = result or []

        self._transition(SimulationState.SELECTING, "ranked")
        for species, ranked in rankings.items():
            if not ranked:
                logger.warning(
                    "%s: no agents to rank in generation %d, keeping previous parent pool",
                    species.value,
                    self.generation,
                )
                continue
            record = self.controllers[species].select(ranked, self.generation)
            logger.info(
                "Generation %d: last winner %s had %s points",
                self.generation,
                record.label,
                record.best_fitness,
            )
            self._persist(record)
            self._publish(
                GenerationCompletedEvent(
                    generation=self.generation,
                    species=species,
                    best_label=record.label,
                    best_fitness=record.best_fitness,
                    best_genome=record.best_genome,
                    parent_count=len(record.parent_pool),
                    survivors=len(ranked),
                )
            )

        self._transition(SimulationState.BREEDING, "selected")
        self._reseed()
        for species, ctrl in self.controllers.items():
            if self._guard_spawn(species, "breeding", lambda c=ctrl: c.breed(self.rng)) is None:
                ctrl.wake_all()

        self._transition(SimulationState.RUNNING, "bred")

    def _guard_spawn(
        self, species: Species, phase: str, spawn: Callable[[], List[Agent]]
    ) -> Optional[List[Agent]]:
        """Run a spawner-backed step; on failure log it and keep the current cohort.

        Returns None when the step raised. A failed re-seed during ranking
        counts as an empty ranking.
        """
        try:
            return spawn()
        except Exception as e:
            logger.warning(
                "%s: %s failed in generation %d, keeping current cohort: %s",
                species.value,
                phase,
                self.generation,
                e,
            )
            return None

    def _persist(self, record: GenerationRecord) -> None:
        if self.store is None:
            return
        try:
            self.store.save_genome_artifact(record.best_genome, record.label)
        except (PersistenceError, OSError) as e:
            logger.warning("Could not save winner %s: %s", record.label, e)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find_agent(self, body: Body) -> Optional[Agent]:
        for ctrl in self.controllers.values():
            agent = ctrl.find_by_body(body)
            if agent is not None:
                return agent
        return None

    def _require(self, target: SimulationState) -> None:
        if not self._machine.can_transition(target):
            raise InvalidStateError(
                f"Cannot move to {target.name} from {self.state.name}"
            )

    def _reject_during_transition(self, operation: str) -> None:
        if self.state in TRANSITION_STATES:
            raise InvalidStateError(f"{operation}() during {self.state.name}")

    def _transition(self, target: SimulationState, reason: str) -> None:
        previous = self._machine.state
        self._machine.transition(target, generation=self.generation, reason=reason)
        self._publish(
            SimulationStateChangedEvent(
                from_state=previous.name,
                to_state=target.name,
                generation=self.generation,
                reason=reason,
            )
        )

    def _publish(self, event: object) -> None:
        """Emit ``event``; mid-transition, a raising handler is logged instead of propagated."""
        if self.state not in TRANSITION_STATES:
            self.event_bus.emit(event)
            return
        try:
            self.event_bus.emit(event)
        except Exception:
            logger.exception(
                "%s handler failed during %s", type(event).__name__, self.state.name
            )

    def __repr__(self) -> str:
        return f"GenerationScheduler(state={self.state.name}, generation={self.generation})"
