"""Simulation configuration dataclasses."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from huntsim.config.evolution import (
    DEFAULT_COHORT_SIZE,
    DEFAULT_PARENT_SIZE,
    DEFAULT_PREY_COHORT_SIZE,
    DEFAULT_RESEED_VALUE,
    DEFAULT_SIMULATION_INTERVAL,
    GENERATION_HISTORY_LIMIT,
)
from huntsim.evolution.mutation import MutationConfig
from huntsim.exceptions import ConfigurationError
from huntsim.fitness import DEFAULT_PAYOFFS, PayoffKey, Payoff
from huntsim.genetics import AgentGenome
from huntsim.species import Species
from huntsim.world import Spawner


@dataclass
class SpeciesConfig:
    """Per-species generation settings.

    Attributes:
        species: Which species this entry configures
        spawner: Generator that places the species' bodies
        cohort_size: Agents requested from the spawner each generation
        parent_size: Genomes kept as the parent pool after selection
        evolution_enabled: Whether offspring pass through mutation
        static: Respawn from ``default_genome`` every cycle, skipping selection
        acts: Whether agents of this species run the decision cycle
        default_genome: Genome used when no parent pool exists
    """

    species: Species
    spawner: Optional[Spawner] = None
    cohort_size: int = DEFAULT_COHORT_SIZE
    parent_size: int = DEFAULT_PARENT_SIZE
    evolution_enabled: bool = True
    static: bool = False
    acts: bool = True
    default_genome: AgentGenome = field(default_factory=AgentGenome)

    def validate(self) -> List[str]:
        issues = []
        name = self.species.value
        if self.spawner is None:
            issues.append(f"{name}: spawner is required")
        if self.cohort_size < 0:
            issues.append(f"{name}: cohort_size must be >= 0, got {self.cohort_size}")
        if not self.static and self.parent_size < 1:
            issues.append(f"{name}: parent_size must be >= 1, got {self.parent_size}")
        return issues


@dataclass
class SimulationConfig:
    """Configuration for a generational run.

    Attributes:
        species: Per-species settings, one entry per spawned species
        mutation: Mutation factor and chance shared by all evolving species
        simulation_interval: Simulated seconds per generation
        reseed_value: Seed applied at the start of every seeding/breeding phase
        initial_generation: Generation counter start, used in winner labels
        run_on_start: Start the simulation as soon as the scheduler is set up
        payoffs: Interaction payoff table
        history_limit: Generation records kept per species
    """

    species: Dict[Species, SpeciesConfig] = field(default_factory=dict)
    mutation: MutationConfig = field(default_factory=MutationConfig)
    simulation_interval: float = DEFAULT_SIMULATION_INTERVAL
    reseed_value: int = DEFAULT_RESEED_VALUE
    initial_generation: int = 0
    run_on_start: bool = False
    payoffs: Dict[PayoffKey, Payoff] = field(default_factory=lambda: dict(DEFAULT_PAYOFFS))
    history_limit: int = GENERATION_HISTORY_LIMIT

    @classmethod
    def with_spawners(
        cls,
        prey: Spawner,
        predator_a: Spawner,
        predator_b: Spawner,
        **overrides,
    ) -> "SimulationConfig":
        """Build the standard three-species setup.

        Prey are static and passive; both predators evolve.
        """
        species = {
            Species.PREY: SpeciesConfig(
                species=Species.PREY,
                spawner=prey,
                cohort_size=DEFAULT_PREY_COHORT_SIZE,
                evolution_enabled=False,
                static=True,
                acts=False,
            ),
            Species.PREDATOR_A: SpeciesConfig(species=Species.PREDATOR_A, spawner=predator_a),
            Species.PREDATOR_B: SpeciesConfig(species=Species.PREDATOR_B, spawner=predator_b),
        }
        return cls(species=species, **overrides)

    def validate(self) -> None:
        """Raise ConfigurationError listing every problem found."""
        issues = []
        if not self.species:
            issues.append("at least one species must be configured")
        for key, species_config in self.species.items():
            if key is not species_config.species:
                issues.append(
                    f"species entry {key.value} holds config for {species_config.species.value}"
                )
            issues.extend(species_config.validate())
        if self.simulation_interval <= 0:
            issues.append(f"simulation_interval must be > 0, got {self.simulation_interval}")
        if not 0.0 <= self.mutation.mutation_chance <= 100.0:
            issues.append(
                f"mutation_chance must be a percent in [0, 100], got {self.mutation.mutation_chance}"
            )
        if self.mutation.mutation_factor < 0.0:
            issues.append(f"mutation_factor must be >= 0, got {self.mutation.mutation_factor}")
        if self.history_limit < 1:
            issues.append(f"history_limit must be >= 1, got {self.history_limit}")
        if issues:
            raise ConfigurationError("Invalid simulation config:\n" + "\n".join(issues))
