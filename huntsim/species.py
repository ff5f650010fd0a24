"""Species and world-object classification.

The world reports what a probe hit using a closed set of tags. Three of the
tags name species that take part in the simulation; the rest describe scenery.
"""

from enum import Enum
from typing import Optional


class Species(Enum):
    """Species that can be spawned and tracked by the scheduler."""

    PREY = "prey"
    PREDATOR_A = "predator_a"
    PREDATOR_B = "predator_b"


class ObjectTag(Enum):
    """Classification of a world object as seen by a perception probe."""

    PREY = "prey"
    PREDATOR_A = "predator_a"
    PREDATOR_B = "predator_b"
    OBSTACLE = "obstacle"
    COVER = "cover"
    NONE = "none"


_TAG_SPECIES = {
    ObjectTag.PREY: Species.PREY,
    ObjectTag.PREDATOR_A: Species.PREDATOR_A,
    ObjectTag.PREDATOR_B: Species.PREDATOR_B,
}


def species_for_tag(tag: ObjectTag) -> Optional[Species]:
    """Return the species a tag denotes, or None for scenery tags."""
    return _TAG_SPECIES.get(tag)


__all__ = ["ObjectTag", "Species", "species_for_tag"]
