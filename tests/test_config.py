"""Tests for simulation configuration defaults and validation."""

import pytest

from huntsim.config.evolution import DEFAULT_RESEED_VALUE, DEFAULT_SIMULATION_INTERVAL
from huntsim.config.simulation_config import SimulationConfig, SpeciesConfig
from huntsim.exceptions import ConfigurationError
from huntsim.species import Species
from tests.fakes.fake_world import FakeSpawner


class TestDefaults:
    def test_standard_setup(self, make_config):
        config = make_config()
        prey = config.species[Species.PREY]
        cat = config.species[Species.PREDATOR_A]

        assert prey.static and not prey.acts and not prey.evolution_enabled
        assert prey.cohort_size == 40
        assert cat.evolution_enabled and cat.acts and not cat.static
        assert (cat.cohort_size, cat.parent_size) == (20, 5)
        assert config.simulation_interval == DEFAULT_SIMULATION_INTERVAL
        assert config.reseed_value == DEFAULT_RESEED_VALUE == 6

    def test_overrides_pass_through(self, make_config):
        config = make_config(simulation_interval=5.0, run_on_start=True)
        assert config.simulation_interval == 5.0
        assert config.run_on_start

    def test_payoff_tables_are_not_shared(self, make_config):
        first, second = make_config(), make_config()
        first.payoffs.clear()
        assert second.payoffs


class TestValidation:
    def test_valid_config_passes(self, make_config):
        make_config().validate()

    def test_empty_species_rejected(self):
        with pytest.raises(ConfigurationError, match="at least one species"):
            SimulationConfig().validate()

    def test_all_problems_are_reported(self, make_config):
        config = make_config(simulation_interval=0.0, history_limit=0)
        config.species[Species.PREDATOR_A].parent_size = 0
        config.species[Species.PREDATOR_B].cohort_size = -1

        with pytest.raises(ConfigurationError) as excinfo:
            config.validate()

        message = str(excinfo.value)
        for fragment in ("simulation_interval", "history_limit", "parent_size", "cohort_size"):
            assert fragment in message

    def test_missing_spawner(self):
        config = SimulationConfig(species={Species.PREY: SpeciesConfig(species=Species.PREY)})
        with pytest.raises(ConfigurationError, match="spawner is required"):
            config.validate()

    def test_mismatched_species_key(self):
        config = SimulationConfig(
            species={Species.PREY: SpeciesConfig(species=Species.PREDATOR_A, spawner=FakeSpawner())}
        )
        with pytest.raises(ConfigurationError, match="holds config for"):
            config.validate()

    def test_mutation_chance_edited_out_of_range(self, make_config):
        config = make_config()
        config.mutation.mutation_chance = 250.0
        with pytest.raises(ConfigurationError, match="mutation_chance"):
            config.validate()

    def test_static_species_may_have_no_parents(self):
        config = SimulationConfig(
            species={
                Species.PREY: SpeciesConfig(
                    species=Species.PREY, spawner=FakeSpawner(), static=True, parent_size=0
                )
            }
        )
        config.validate()
