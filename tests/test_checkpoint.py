"""Tests for checkpoint persistence."""

import json

import numpy as np
import pytest

from apocalypse_search.config import RandomParameters, SearchParameters
from apocalypse_search.errors import CheckpointCorruptError, InvalidParameterError
from apocalypse_search.utils.checkpoint import (
    Checkpoint,
    CheckpointStore,
    PeriodicCheckpointer,
    load_checkpoint,
    save_checkpoint,
)


def _write(path, data):
    with open(path, "w") as f:
        json.dump(data, f)
    return path


def _valid_dict(**overrides):
    d = {"power": 2, "base": 10, "seq_len": 1, "start": 1, "stop": 5,
         "results": [5, 4, 3, 4, 4, 5, 4, 5, 4, 5]}
    d.update(overrides)
    return d


class TestCheckpointStore:
    """Tests for saving and loading checkpoints."""

    def test_round_trip(self, tmp_path):
        params = SearchParameters(power=3, base=10, seq_len=2, start=1, stop=40)
        counts = np.arange(100, dtype=np.int64)
        store = CheckpointStore(tmp_path / "ckpt.json")
        store.save(counts, params, 40)

        checkpoint = store.load()
        assert (checkpoint.power, checkpoint.base, checkpoint.seq_len) == (3, 10, 2)
        assert (checkpoint.start, checkpoint.stop) == (1, 40)
        assert checkpoint.method == "power"
        np.testing.assert_array_equal(checkpoint.results, counts)

    def test_file_layout(self, tmp_path):
        path = save_checkpoint(tmp_path / "out" / "c.json", [1] * 10,
                               SearchParameters(seq_len=1, stop=9), 9)
        with open(path) as f:
            data = json.load(f)
        assert data["results"] == [1] * 10
        assert data["power"] == 2
        assert data["stop"] == 9
        assert data["format"] == "v4"
        assert "length" not in data
        assert not (tmp_path / "out" / "c.json.tmp").exists()

    def test_origin_recorded(self, tmp_path):
        params = SearchParameters(seq_len=1, start=6, stop=9)
        path = save_checkpoint(tmp_path / "c.json", [0] * 10, params, 9, origin=1)
        assert load_checkpoint(path).start == 1

    def test_random_round_trip(self, tmp_path):
        params = RandomParameters(base=10, seq_len=1, length=20, stop=30, seed=11)
        path = save_checkpoint(tmp_path / "r.json", [2] * 10, params, 30)
        with open(path) as f:
            data = json.load(f)
        assert data["power"] == 0
        assert data["method"] == "random"
        assert data["length"] == 20
        assert data["seed"] == 11

        checkpoint = load_checkpoint(path)
        resumed = checkpoint.resume_parameters(stop=60)
        assert isinstance(resumed, RandomParameters)
        assert (resumed.start, resumed.stop, resumed.seed, resumed.length) == (31, 60, 11, 20)

    def test_minimal_file_loads_as_power(self, tmp_path):
        path = _write(tmp_path / "m.json", _valid_dict())
        checkpoint = load_checkpoint(path)
        assert checkpoint.method == "power"
        assert checkpoint.results.tolist() == [5, 4, 3, 4, 4, 5, 4, 5, 4, 5]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_checkpoint(tmp_path / "nope.json")

    def test_failed_write_keeps_previous_file(self, tmp_path, monkeypatch):
        """A write that fails partway leaves no temp file and the old checkpoint intact."""
        params = SearchParameters(seq_len=1, stop=5)
        path = save_checkpoint(tmp_path / "c.json", [1] * 10, params, 5)
        before = path.read_text()

        monkeypatch.setattr(Checkpoint, "to_dict", lambda self: {"results": object()})
        with pytest.raises(TypeError):
            save_checkpoint(path, [2] * 10, params, 6)

        assert path.read_text() == before
        assert sorted(p.name for p in tmp_path.iterdir()) == ["c.json"]


class TestCheckpointValidation:
    """Tests for rejecting corrupt checkpoints."""

    def test_not_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(CheckpointCorruptError):
            load_checkpoint(path)

    def test_not_an_object(self, tmp_path):
        with pytest.raises(CheckpointCorruptError):
            load_checkpoint(_write(tmp_path / "l.json", [1, 2, 3]))

    def test_missing_fields(self, tmp_path):
        for key in ("power", "base", "seq_len", "start", "stop", "results"):
            d = _valid_dict()
            del d[key]
            with pytest.raises(CheckpointCorruptError, match=key):
                Checkpoint.from_dict(d)

    def test_results_length_mismatch(self):
        with pytest.raises(CheckpointCorruptError):
            Checkpoint.from_dict(_valid_dict(results=[0] * 9))
        with pytest.raises(CheckpointCorruptError):
            Checkpoint.from_dict(_valid_dict(seq_len=2))

    def test_bad_types(self):
        with pytest.raises(CheckpointCorruptError):
            Checkpoint.from_dict(_valid_dict(base="10"))
        with pytest.raises(CheckpointCorruptError):
            Checkpoint.from_dict(_valid_dict(stop=True))
        with pytest.raises(CheckpointCorruptError):
            Checkpoint.from_dict(_valid_dict(results=[0.5] * 10))
        with pytest.raises(CheckpointCorruptError):
            Checkpoint.from_dict(_valid_dict(results=[-1] * 10))

    def test_invalid_base(self):
        with pytest.raises(CheckpointCorruptError):
            Checkpoint.from_dict(_valid_dict(base=1, results=[0]))

    def test_unknown_method(self):
        with pytest.raises(CheckpointCorruptError):
            Checkpoint.from_dict(_valid_dict(method="fibonacci"))

    def test_power_below_two(self):
        for power in (0, 1, -3):
            with pytest.raises(CheckpointCorruptError, match="power"):
                Checkpoint.from_dict(_valid_dict(power=power))

    def test_random_length_below_one(self):
        with pytest.raises(CheckpointCorruptError, match="length"):
            Checkpoint.from_dict(_valid_dict(power=0, method="random", length=0, seed=1))

    def test_random_checkpoint_ignores_power(self):
        checkpoint = Checkpoint.from_dict(_valid_dict(power=0, method="random", length=5, seed=1))
        assert checkpoint.resume_parameters(stop=10).start == 6

    def test_random_without_seed_cannot_resume(self):
        checkpoint = Checkpoint.from_dict(_valid_dict(power=0, method="random", length=20))
        with pytest.raises(CheckpointCorruptError):
            checkpoint.resume_parameters(stop=50)


class TestResumeParameters:
    """Tests for Checkpoint.resume_parameters."""

    def test_power_resume_starts_after_stop(self):
        checkpoint = Checkpoint.from_dict(_valid_dict())
        params = checkpoint.resume_parameters(stop=20)
        assert params.start == 6
        assert params.stop == 20
        assert (params.power, params.base, params.seq_len) == (2, 10, 1)

    def test_power_resume_with_safety(self):
        params = Checkpoint.from_dict(_valid_dict()).resume_parameters(safety=10)
        assert params.mode == "safety"
        assert params.start == 6

    def test_stop_not_beyond_checkpoint(self):
        checkpoint = Checkpoint.from_dict(_valid_dict())
        with pytest.raises(InvalidParameterError):
            checkpoint.resume_parameters(stop=5)


class _FakeClock:
    def __init__(self, *times):
        self.times = list(times)

    def __call__(self):
        return self.times.pop(0)


class TestPeriodicCheckpointer:
    """Tests for time-triggered saves."""

    def test_saves_after_interval(self, tmp_path):
        params = SearchParameters(seq_len=1, stop=100)
        store = CheckpointStore(tmp_path / "p.json")
        saver = PeriodicCheckpointer(store, params, interval_minutes=1,
                                     clock=_FakeClock(0.0, 30.0, 61.0, 90.0, 122.0))
        counts = np.zeros(10, dtype=np.int64)

        assert not saver.maybe_save(counts, 1)
        assert not store.exists()
        assert saver.maybe_save(counts, 2)
        assert load_checkpoint(store.path).stop == 2
        assert not saver.maybe_save(counts, 3)
        assert saver.maybe_save(counts, 4)
        assert saver.saves == 2

    def test_disabled(self, tmp_path):
        store = CheckpointStore(tmp_path / "p.json")
        saver = PeriodicCheckpointer(store, SearchParameters(seq_len=1, stop=10), interval_minutes=0,
                                     clock=_FakeClock(0.0, 1e9))
        assert not saver.enabled
        assert not saver.maybe_save(np.zeros(10, dtype=np.int64), 1)
        assert not store.exists()

    def test_failed_save_does_not_raise(self, tmp_path, monkeypatch, caplog):
        store = CheckpointStore(tmp_path / "p.json")
        saver = PeriodicCheckpointer(store, SearchParameters(seq_len=1, stop=10), interval_minutes=1,
                                     clock=_FakeClock(0.0, 100.0))

        def fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(store, "save", fail)
        assert not saver.maybe_save(np.zeros(10, dtype=np.int64), 1)
        assert "Periodic checkpoint" in caplog.text
        assert saver.saves == 0
