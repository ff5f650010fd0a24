"""Pytest configuration and fixtures for huntsim tests."""

import random

import pytest

from huntsim.config.simulation_config import SimulationConfig
from huntsim.persistence import MemoryGenomeStore
from huntsim.scheduler import GenerationScheduler
from tests.fakes.fake_world import FakeSpawner, ScriptedWorld


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def world():
    """An empty scripted world: every probe misses."""
    return ScriptedWorld()


@pytest.fixture
def make_config():
    """Factory for the standard three-species config with fresh fake spawners."""

    def factory(**overrides) -> SimulationConfig:
        return SimulationConfig.with_spawners(
            prey=FakeSpawner(),
            predator_a=FakeSpawner(),
            predator_b=FakeSpawner(),
            **overrides,
        )

    return factory


@pytest.fixture
def memory_store():
    return MemoryGenomeStore()


@pytest.fixture
def scheduler(make_config, world, memory_store):
    """A scheduler with a short generation interval, not yet started."""
    return GenerationScheduler(
        make_config(simulation_interval=1.0),
        world,
        store=memory_store,
        rng=random.Random(123),
    )
