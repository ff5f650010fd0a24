"""Domain event definitions emitted by the generation scheduler.

Events are frozen dataclasses carrying all the context a handler needs, so
observers never have to call back into the simulation.
"""

from __future__ import annotations

from dataclasses import dataclass

from huntsim.fitness import InteractionKind
from huntsim.genetics import AgentGenome
from huntsim.species import Species


@dataclass(frozen=True)
class InteractionAppliedEvent:
    """An interaction report changed (or could have changed) an agent's fitness.

    Attributes:
        agent_id: ID of the reporting agent
        species: Species of the reporting agent
        other_species: Species it interacted with
        kind: How they met
        delta: Fitness change applied
        fitness: Agent fitness after the change
        consumed_other: Whether the other party was removed
    """

    agent_id: int
    species: Species
    other_species: Species
    kind: InteractionKind
    delta: float
    fitness: float
    consumed_other: bool


@dataclass(frozen=True)
class AgentDespawnedEvent:
    """An agent left the world before its generation ended."""

    agent_id: int
    species: Species
    fitness: float
    reason: str


@dataclass(frozen=True)
class GenerationCompletedEvent:
    """Selection finished for one species.

    Attributes:
        generation: Index of the generation that just ended
        species: Species that was ranked
        best_label: Generation-qualified label of the winner
        best_fitness: Winner's accumulated fitness
        best_genome: Copy of the winner's genome
        parent_count: Size of the new parent pool
        survivors: Live agents that were ranked
    """

    generation: int
    species: Species
    best_label: str
    best_fitness: float
    best_genome: AgentGenome
    parent_count: int
    survivors: int


@dataclass(frozen=True)
class SimulationStateChangedEvent:
    """The scheduler's state machine moved."""

    from_state: str
    to_state: str
    generation: int
    reason: str = ""
