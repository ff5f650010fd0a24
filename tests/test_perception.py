"""Tests for the ray-fan perception sampler."""

import pytest

from huntsim.genetics import AgentGenome
from huntsim.math_utils import Vector3
from huntsim.perception import PerceptionSampler, ground_forward
from huntsim.species import ObjectTag
from huntsim.world import RayHit
from tests.fakes.fake_world import ScriptedWorld

ORIGIN = Vector3(0.0, 0.0, 0.0)
NORTH = Vector3(0.0, 0.0, 1.0)


class TestFanShape:
    def test_radius_four_gives_symmetric_fan_plus_forward(self):
        """Four steps of 90 degrees from -180 to 180, then the forward probe."""
        world = ScriptedWorld()
        genome = AgentGenome(ray_radius=4, sight_range=10.0)

        samples = PerceptionSampler().sample(world, ORIGIN, NORTH, genome)

        assert len(samples) == 6
        expected_yaws = [-180.0, -90.0, 0.0, 90.0, 180.0, 0.0]
        for sample, yaw in zip(samples, expected_yaws):
            assert sample.direction == Vector3.from_yaw(yaw)
        assert [s.effective_range for s in samples] == [10.0] * 5 + [15.0]

    @pytest.mark.parametrize("ray_radius", [1, 3, 16, 25])
    def test_sample_count_is_radius_plus_two(self, ray_radius):
        samples = PerceptionSampler().sample(
            ScriptedWorld(), ORIGIN, NORTH, AgentGenome(ray_radius=ray_radius)
        )
        assert len(samples) == ray_radius + 2

    def test_forward_probe_reaches_one_and_a_half_sight(self):
        world = ScriptedWorld()
        PerceptionSampler().sample(world, ORIGIN, NORTH, AgentGenome(sight_range=8.0))
        direction, max_distance = world.casts[-1]
        assert direction == NORTH
        assert max_distance == pytest.approx(12.0)

    def test_fan_follows_heading(self):
        east = Vector3(1.0, 0.0, 0.0)
        samples = PerceptionSampler().sample(
            ScriptedWorld(), ORIGIN, east, AgentGenome(ray_radius=2)
        )
        assert samples[0].direction == Vector3.from_yaw(90.0 - 180.0)
        assert samples[-1].direction == east


class TestGroundPlane:
    def test_vertical_component_is_ignored(self):
        tilted = Vector3(0.0, 0.5, 1.0)
        samples = PerceptionSampler().sample(
            ScriptedWorld(), ORIGIN, tilted, AgentGenome(ray_radius=4)
        )
        assert all(s.direction.y == 0.0 for s in samples)
        assert samples[-1].direction == NORTH

    def test_vertical_heading_falls_back_to_plus_z(self):
        assert ground_forward(Vector3(0.0, 1.0, 0.0)) == NORTH

    def test_ground_forward_normalizes(self):
        assert ground_forward(Vector3(3.0, 2.0, 0.0)) == Vector3(1.0, 0.0, 0.0)


class TestHits:
    def test_miss_has_no_tag_or_distance(self):
        samples = PerceptionSampler().sample(ScriptedWorld(), ORIGIN, NORTH, AgentGenome())
        assert all(s.tag is ObjectTag.NONE and s.distance is None for s in samples)
        assert not any(s.hit for s in samples)

    def test_hit_is_reported_on_matching_probe(self):
        world = ScriptedWorld(hits={90: RayHit(ObjectTag.PREY, 3.0)})
        samples = PerceptionSampler().sample(world, ORIGIN, NORTH, AgentGenome(ray_radius=4))

        hit = samples[3]
        assert hit.hit
        assert hit.tag is ObjectTag.PREY
        assert hit.distance == 3.0
        assert sum(1 for s in samples if s.hit) == 1

    def test_forward_probe_sees_past_fan_range(self):
        world = ScriptedWorld(hits={0: RayHit(ObjectTag.PREDATOR_B, 12.0)})
        samples = PerceptionSampler().sample(
            world, ORIGIN, NORTH, AgentGenome(ray_radius=4, sight_range=10.0)
        )
        assert samples[2].tag is ObjectTag.NONE
        assert samples[-1].tag is ObjectTag.PREDATOR_B

    def test_none_tagged_hit_counts_as_miss(self):
        class NoneTagWorld(ScriptedWorld):
            def cast_ray(self, origin, direction, max_distance):
                return RayHit(ObjectTag.NONE, 1.0)

        samples = PerceptionSampler().sample(NoneTagWorld(), ORIGIN, NORTH, AgentGenome())
        assert not any(s.hit for s in samples)
        assert all(s.distance is None for s in samples)
