"""Fan-of-rays perception.

An agent looks around by casting ``ray_radius + 1`` rays swept through a full
turn, starting half a turn behind its heading, plus one longer ray straight
ahead. Each ray yields one ``PerceptionSample``.
"""

from dataclasses import dataclass
from typing import List, Optional

from huntsim.config.agents import FORWARD_SIGHT_FACTOR
from huntsim.genetics import AgentGenome
from huntsim.math_utils import Vector3
from huntsim.species import ObjectTag
from huntsim.world import WorldQuery

_FALLBACK_FORWARD = Vector3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class PerceptionSample:
    """What one probe saw.

    Attributes:
        direction: Ground-plane probe direction (vertical component zeroed)
        effective_range: Maximum distance this probe was allowed to reach
        tag: Classification of the hit, ObjectTag.NONE for a miss
        distance: Hit distance; None when ``tag`` is ObjectTag.NONE
    """

    direction: Vector3
    effective_range: float
    tag: ObjectTag = ObjectTag.NONE
    distance: Optional[float] = None

    @property
    def hit(self) -> bool:
        return self.tag is not ObjectTag.NONE and self.distance is not None


def ground_forward(forward: Vector3) -> Vector3:
    """Flatten a heading onto the ground plane and renormalize it.

    A purely vertical heading has no ground-plane direction; +Z is used.
    """
    flat = forward.flattened().normalize()
    if flat.length() == 0:
        return _FALLBACK_FORWARD.copy()
    return flat


class PerceptionSampler:
    """Casts the perception fan for one agent."""

    def sample(
        self,
        world: WorldQuery,
        origin: Vector3,
        forward: Vector3,
        genome: AgentGenome,
    ) -> List[PerceptionSample]:
        """Cast ``genome.ray_radius + 2`` probes from ``origin``.

        Args:
            world: Spatial query capability
            origin: Agent position
            forward: Agent heading (any vertical component is ignored)
            genome: Supplies ray radius and sight range

        Returns:
            Fan samples ordered from the starting edge, then the forward probe
        """
        heading = ground_forward(forward)
        step = genome.step_degrees
        ray_direction = heading.rotated_yaw(-step * (genome.ray_radius / 2.0))

        samples: List[PerceptionSample] = []
        for _ in range(genome.ray_radius + 1):
            samples.append(self._probe(world, origin, ray_direction, genome.sight_range))
            ray_direction = ray_direction.rotated_yaw(step)

        forward_range = genome.sight_range * FORWARD_SIGHT_FACTOR
        samples.append(self._probe(world, origin, heading, forward_range))
        return samples

    @staticmethod
    def _probe(
        world: WorldQuery, origin: Vector3, direction: Vector3, max_distance: float
    ) -> PerceptionSample:
        flat = direction.flattened()
        hit = world.cast_ray(origin, direction, max_distance)
        if hit is None or hit.tag is ObjectTag.NONE:
            return PerceptionSample(direction=flat, effective_range=max_distance)
        return PerceptionSample(
            direction=flat,
            effective_range=max_distance,
            tag=hit.tag,
            distance=hit.distance,
        )
