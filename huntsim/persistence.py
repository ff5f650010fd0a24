"""Genome artifact persistence.

This module is the persistence boundary for ``AgentGenome``. Generation
winners are written as small JSON documents, one per label, carrying a schema
version so the format can evolve safely.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import orjson
from pydantic import BaseModel, ValidationError

from huntsim.exceptions import PersistenceError
from huntsim.genetics import AgentGenome, GenePair

logger = logging.getLogger(__name__)

GENOME_SCHEMA_VERSION = 1
ARTIFACT_SUFFIX = ".json"


class GenePairModel(BaseModel):
    weight: float
    distance_factor: float


class GenomeArtifact(BaseModel):
    """Validated on-disk representation of a persisted genome."""

    schema_version: int = GENOME_SCHEMA_VERSION
    label: str
    ray_radius: int
    sight_range: float
    movement_speed: float
    random_utility_range: Tuple[float, float]
    prey: GenePairModel
    predator_a: GenePairModel
    predator_b: GenePairModel

    def to_genome(self) -> AgentGenome:
        return AgentGenome(
            ray_radius=self.ray_radius,
            sight_range=self.sight_range,
            movement_speed=self.movement_speed,
            random_utility_range=self.random_utility_range,
            prey=GenePair(self.prey.weight, self.prey.distance_factor),
            predator_a=GenePair(self.predator_a.weight, self.predator_a.distance_factor),
            predator_b=GenePair(self.predator_b.weight, self.predator_b.distance_factor),
        )


def genome_to_dict(genome: AgentGenome, label: str = "") -> Dict[str, Any]:
    """Serialize a genome into JSON-compatible primitives."""

    def pair(value: GenePair) -> Dict[str, float]:
        return {"weight": value.weight, "distance_factor": value.distance_factor}

    return {
        "schema_version": GENOME_SCHEMA_VERSION,
        "label": label,
        "ray_radius": genome.ray_radius,
        "sight_range": genome.sight_range,
        "movement_speed": genome.movement_speed,
        "random_utility_range": list(genome.random_utility_range),
        "prey": pair(genome.prey),
        "predator_a": pair(genome.predator_a),
        "predator_b": pair(genome.predator_b),
    }


def genome_from_dict(data: Dict[str, Any]) -> AgentGenome:
    """Deserialize and validate a genome.

    Raises:
        PersistenceError: If the payload is malformed or from another schema version
    """
    try:
        artifact = GenomeArtifact.model_validate(data)
    except ValidationError as e:
        raise PersistenceError(f"Invalid genome artifact: {e}") from e
    if artifact.schema_version != GENOME_SCHEMA_VERSION:
        raise PersistenceError(
            f"Unsupported genome schema version {artifact.schema_version}, "
            f"expected {GENOME_SCHEMA_VERSION}"
        )
    return artifact.to_genome()


class JsonGenomeStore:
    """Writes one ``<label>.json`` file per saved genome."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, label: str) -> Path:
        if not label or "/" in label or "\\" in label or label in (".", ".."):
            raise PersistenceError(f"Invalid artifact label: {label!r}")
        return self._directory / f"{label}{ARTIFACT_SUFFIX}"

    def save_genome_artifact(self, genome: AgentGenome, label: str) -> Path:
        path = self.path_for(label)
        payload = orjson.dumps(genome_to_dict(genome, label), option=orjson.OPT_INDENT_2)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except OSError as e:
            raise PersistenceError(f"Failed to write genome artifact {path}: {e}") from e
        logger.debug("Saved genome artifact %s", path)
        return path

    def load_genome_artifact(self, label: str) -> AgentGenome:
        path = self.path_for(label)
        try:
            data = orjson.loads(path.read_bytes())
        except OSError as e:
            raise PersistenceError(f"Failed to read genome artifact {path}: {e}") from e
        except orjson.JSONDecodeError as e:
            raise PersistenceError(f"Corrupt genome artifact {path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Genome artifact {path} is not a JSON object")
        return genome_from_dict(data)

    def list_labels(self) -> List[str]:
        if not self._directory.is_dir():
            return []
        return sorted(p.stem for p in self._directory.glob(f"*{ARTIFACT_SUFFIX}"))


class MemoryGenomeStore:
    """In-memory store for headless runs and tests."""

    def __init__(self) -> None:
        self.artifacts: Dict[str, AgentGenome] = {}

    def save_genome_artifact(self, genome: AgentGenome, label: str) -> None:
        self.artifacts[label] = genome.copy()

    def load_genome_artifact(self, label: str) -> Optional[AgentGenome]:
        genome = self.artifacts.get(label)
        return genome.copy() if genome is not None else None
