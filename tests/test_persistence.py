"""Tests for genome artifact persistence."""

import orjson
import pytest

from huntsim.exceptions import PersistenceError
from huntsim.genetics import AgentGenome, GenePair
from huntsim.persistence import (
    GENOME_SCHEMA_VERSION,
    JsonGenomeStore,
    MemoryGenomeStore,
    genome_from_dict,
    genome_to_dict,
)
from huntsim.scheduler import GenerationScheduler
from huntsim.species import Species


@pytest.fixture
def genome():
    return AgentGenome(
        ray_radius=12,
        sight_range=8.5,
        movement_speed=4.25,
        random_utility_range=(0.5, -0.5),
        prey=GenePair(1.5, -2.0),
        predator_a=GenePair(0.25, 0.75),
        predator_b=GenePair(-3.0, 1.0),
    )


class TestBoundaryFormat:
    def test_dict_carries_schema_version_and_label(self, genome):
        data = genome_to_dict(genome, "predator_a-3Gen-7")
        assert data["schema_version"] == GENOME_SCHEMA_VERSION
        assert data["label"] == "predator_a-3Gen-7"
        assert data["prey"] == {"weight": 1.5, "distance_factor": -2.0}

    def test_dict_restores_equal_genome(self, genome):
        assert genome_from_dict(genome_to_dict(genome, "x")) == genome

    def test_missing_field_is_rejected(self, genome):
        data = genome_to_dict(genome, "x")
        del data["sight_range"]
        with pytest.raises(PersistenceError):
            genome_from_dict(data)

    def test_other_schema_version_is_rejected(self, genome):
        data = genome_to_dict(genome, "x")
        data["schema_version"] = GENOME_SCHEMA_VERSION + 1
        with pytest.raises(PersistenceError, match="schema version"):
            genome_from_dict(data)

    def test_floors_apply_on_load(self, genome):
        data = genome_to_dict(genome, "x")
        data["ray_radius"] = 0
        assert genome_from_dict(data).ray_radius == 1


class TestJsonGenomeStore:
    def test_save_writes_indented_json(self, tmp_path, genome):
        store = JsonGenomeStore(tmp_path / "winners")

        path = store.save_genome_artifact(genome, "predator_b-9Gen-2")

        assert path == tmp_path / "winners" / "predator_b-9Gen-2.json"
        raw = path.read_bytes()
        assert b"\n  " in raw
        assert orjson.loads(raw)["movement_speed"] == 4.25

    def test_load_returns_saved_genome(self, tmp_path, genome):
        store = JsonGenomeStore(tmp_path)
        store.save_genome_artifact(genome, "best")
        assert store.load_genome_artifact("best") == genome

    def test_list_labels(self, tmp_path, genome):
        store = JsonGenomeStore(tmp_path)
        assert JsonGenomeStore(tmp_path / "missing").list_labels() == []
        store.save_genome_artifact(genome, "b")
        store.save_genome_artifact(genome, "a")
        assert store.list_labels() == ["a", "b"]

    @pytest.mark.parametrize("label", ["", "..", "a/b", "a\\b"])
    def test_unsafe_labels_are_rejected(self, tmp_path, genome, label):
        with pytest.raises(PersistenceError):
            JsonGenomeStore(tmp_path).save_genome_artifact(genome, label)

    def test_unwritable_directory_raises_persistence_error(self, tmp_path, genome):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(PersistenceError):
            JsonGenomeStore(blocker / "sub").save_genome_artifact(genome, "x")

    def test_missing_artifact_raises(self, tmp_path):
        with pytest.raises(PersistenceError):
            JsonGenomeStore(tmp_path).load_genome_artifact("nobody")

    def test_corrupt_artifact_raises(self, tmp_path):
        (tmp_path / "broken.json").write_text("{not json")
        with pytest.raises(PersistenceError, match="Corrupt"):
            JsonGenomeStore(tmp_path).load_genome_artifact("broken")

    def test_non_object_artifact_raises(self, tmp_path):
        (tmp_path / "list.json").write_bytes(orjson.dumps([1, 2, 3]))
        with pytest.raises(PersistenceError):
            JsonGenomeStore(tmp_path).load_genome_artifact("list")

    def test_scheduler_writes_one_file_per_winner(self, tmp_path, make_config, world):
        store = JsonGenomeStore(tmp_path)
        scheduler = GenerationScheduler(make_config(simulation_interval=1.0), world, store=store)
        scheduler.start_simulation()

        scheduler.tick(1.0)

        labels = store.list_labels()
        assert len(labels) == 2
        assert all(label.endswith("Gen-1") for label in labels)
        cat_winner = scheduler.last_winner(Species.PREDATOR_A)
        assert labels[0] == cat_winner.label
        assert store.load_genome_artifact(labels[0]) == cat_winner.best_genome


class TestMemoryGenomeStore:
    def test_round_trip_returns_copies(self, genome):
        store = MemoryGenomeStore()
        store.save_genome_artifact(genome, "g")
        loaded = store.load_genome_artifact("g")
        assert loaded == genome
        assert loaded is not genome
        assert store.load_genome_artifact("missing") is None
