"""Runtime state of one agent and its per-tick decision cycle."""

import random
from typing import Optional

from huntsim.decision import DirectionSelector, ScoredDirection, UtilityEvaluator
from huntsim.fitness import FitnessAccumulator, Payoff
from huntsim.genetics import AgentGenome
from huntsim.movement import MotionController
from huntsim.perception import PerceptionSampler
from huntsim.species import Species
from huntsim.world import Body, WorldQuery


class DecisionCycle:
    """Perception -> utility -> selection -> motion, run once per awake agent per tick."""

    def __init__(
        self,
        sampler: Optional[PerceptionSampler] = None,
        evaluator: Optional[UtilityEvaluator] = None,
        selector: Optional[DirectionSelector] = None,
        motion: Optional[MotionController] = None,
    ) -> None:
        self.sampler = sampler or PerceptionSampler()
        self.evaluator = evaluator or UtilityEvaluator()
        self.selector = selector or DirectionSelector()
        self.motion = motion or MotionController()

    def run(self, agent: "Agent", world: WorldQuery, rng: random.Random) -> ScoredDirection:
        body = agent.body
        position = body.position
        forward = body.forward
        samples = self.sampler.sample(world, position, forward, agent.genome)
        scored = self.evaluator.evaluate(samples, agent.genome, world, position, forward, rng)
        chosen = self.selector.select(scored, rng)
        self.motion.apply(body, chosen.direction, agent.genome.movement_speed)
        return chosen


class Agent:
    """A spawned agent: genome, fitness and lifecycle flags around a host body.

    Heading and velocity live on the body; nothing here survives into the next
    generation except, possibly, a copy of the genome.
    """

    def __init__(
        self,
        agent_id: int,
        species: Species,
        genome: AgentGenome,
        body: Body,
        label: Optional[str] = None,
    ) -> None:
        self.agent_id = agent_id
        self.species = species
        self.genome: AgentGenome = genome.copy()
        self.body = body
        self.label = label or f"{species.value}-{agent_id}"
        self._fitness = FitnessAccumulator()
        self.awake = False
        self.despawned = False

    @property
    def fitness(self) -> float:
        return self._fitness.score

    @property
    def alive(self) -> bool:
        return not self.despawned

    def record_interaction(self, payoff: Payoff) -> float:
        """Apply an interaction payoff to this agent's fitness."""
        return self._fitness.apply(payoff)

    def wake(self) -> None:
        if not self.despawned:
            self.awake = True

    def sleep(self, motion: MotionController) -> None:
        self.awake = False
        motion.halt(self.body)

    def mark_despawned(self) -> None:
        self.awake = False
        self.despawned = True

    def tick(self, cycle: DecisionCycle, world: WorldQuery, rng: random.Random) -> Optional[ScoredDirection]:
        """Run one decision cycle if the agent is awake."""
        if not self.awake or self.despawned:
            return None
        return cycle.run(self, world, rng)

    def __repr__(self) -> str:
        return (
            f"Agent(id={self.agent_id}, species={self.species.value}, "
            f"fitness={self.fitness}, awake={self.awake})"
        )
