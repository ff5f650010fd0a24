"""Abstract interfaces for the collaborators huntsim drives but does not own.

The simulation core never simulates geometry or physics itself. Instead it
talks to the host through the Protocols below, so the same decision and
generation logic runs against a game engine, a headless arena, or the
scripted fakes used in tests.

Design Philosophy:
- WorldQuery is about SPATIAL QUERIES: ray casts and sphere overlaps
- Body is the motion capability of one spawned object
- Spawner places a cohort of bodies; placement rules are its own business
- GenomeStore persists generation winners; it is best effort
"""

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

from huntsim.math_utils import Vector3
from huntsim.species import ObjectTag

if TYPE_CHECKING:
    from huntsim.genetics import AgentGenome


@dataclass(frozen=True)
class RayHit:
    """Result of a ray cast that struck something.

    Attributes:
        tag: Classification of the object that was hit
        distance: Distance from the ray origin to the hit point
    """

    tag: ObjectTag
    distance: float


@dataclass(frozen=True)
class Overlap:
    """An object found by a sphere overlap query."""

    tag: ObjectTag
    position: Vector3


@runtime_checkable
class WorldQuery(Protocol):
    """Spatial queries the decision cycle issues every tick."""

    def cast_ray(
        self, origin: Vector3, direction: Vector3, max_distance: float
    ) -> Optional[RayHit]:
        """Cast one ray and report the first object hit within ``max_distance``.

        Returns:
            The hit, or None when nothing was struck. A miss is a normal outcome.
        """
        ...

    def overlap_sphere(self, center: Vector3, radius: float) -> List[Overlap]:
        """List every object whose collider intersects the sphere."""
        ...


@runtime_checkable
class Body(Protocol):
    """Motion capability of a spawned object.

    The host physics integrator owns the vertical velocity component; the
    decision cycle reads it and writes it back unchanged.
    """

    @property
    def position(self) -> Vector3:
        ...

    @property
    def forward(self) -> Vector3:
        """Current heading as a unit vector."""
        ...

    @property
    def velocity(self) -> Vector3:
        ...

    def set_velocity(self, velocity: Vector3) -> None:
        ...

    def set_forward(self, forward: Vector3) -> None:
        ...


@runtime_checkable
class Spawner(Protocol):
    """Places a fresh cohort of bodies in its area.

    Each call replaces the cohort the spawner created previously. It may
    return fewer bodies than requested when no valid placement is found.
    """

    def regenerate_objects(self, count: int, rng: random.Random) -> List[Body]:
        ...


@runtime_checkable
class GenomeStore(Protocol):
    """Persistence collaborator for generation winners."""

    def save_genome_artifact(self, genome: "AgentGenome", label: str) -> None:
        """Persist ``genome`` under ``label``; may raise PersistenceError."""
        ...
