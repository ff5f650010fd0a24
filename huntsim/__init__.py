"""Predator/prey evolution engine.

This package contains the pure simulation logic for agents that perceive a
3D world through a fan of rays, steer by genome-weighted utility, and evolve
across timed generations. It has no rendering or physics of its own; the host
supplies those through the Protocols in ``huntsim.world``. Key modules:

- perception: ray fan sampling
- decision: utility scoring and stochastic direction selection
- movement: heading smoothing and velocity updates
- genetics / evolution: genome, mutation and truncation selection
- population: per-species cohorts and parent pools
- scheduler: the generational state machine that drives everything
- persistence: JSON genome artifacts

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from submodules for internal helpers.
"""

from huntsim.agent import Agent, DecisionCycle
from huntsim.config.simulation_config import SimulationConfig, SpeciesConfig
from huntsim.fitness import InteractionKind
from huntsim.genetics import AgentGenome, GenePair
from huntsim.logging_config import configure_logging
from huntsim.math_utils import Vector3
from huntsim.scheduler import GenerationScheduler
from huntsim.species import ObjectTag, Species
from huntsim.state_machine import SimulationState

__all__ = [
    "Agent",
    "AgentGenome",
    "DecisionCycle",
    "GenePair",
    "GenerationScheduler",
    "InteractionKind",
    "ObjectTag",
    "SimulationConfig",
    "SimulationState",
    "SpeciesConfig",
    "Species",
    "Vector3",
    "configure_logging",
]
