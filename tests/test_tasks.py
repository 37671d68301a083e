"""Tests for the Hydra task layer and device configuration."""

import os

import pytest
import torch
from hydra import compose, initialize_config_dir
from omegaconf import OmegaConf

from core.device import DeviceConfig, resolve_device, resolve_dtype
from main import TASKS, get_task
from tasks.accuracy import AccuracyTask
from tasks.benchmark import BenchmarkTask


CONF_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "conf")


def _cfg(task):
    return OmegaConf.create({
        "device": "cpu",
        "dtype": "float64",
        "seed": 0,
        "task": task,
    })


class TestConfig:

    def test_default_config_composes(self):
        with initialize_config_dir(config_dir=CONF_DIR, version_base=None):
            cfg = compose(config_name="config")
        assert cfg.task.name == "accuracy"
        assert 5.4 in cfg.task.norms
        assert cfg.log_level is None

    def test_task_override(self):
        with initialize_config_dir(config_dir=CONF_DIR, version_base=None):
            cfg = compose(config_name="config", overrides=["task=benchmark", "dtype=float32"])
        assert cfg.task.name == "benchmark"
        assert cfg.dtype == "float32"

    def test_get_task(self):
        task = get_task(_cfg({"name": "benchmark", "sizes": [2]}))
        assert isinstance(task, BenchmarkTask)
        assert set(TASKS) == {"accuracy", "benchmark"}

    def test_unknown_task(self):
        with pytest.raises(ValueError, match="Unknown task"):
            get_task(_cfg({"name": "nope"}))


class TestDeviceConfig:

    def test_explicit_device(self):
        assert resolve_device("cpu") == "cpu"

    def test_auto_resolves(self):
        assert resolve_device("auto") in {"cuda", "mps", "cpu"}

    def test_dtype_strings(self):
        assert resolve_dtype("complex64") == torch.complex64
        assert resolve_dtype(torch.float32) == torch.float32
        with pytest.raises(ValueError, match="Unknown dtype"):
            resolve_dtype("int8")

    def test_seeded_randn_is_reproducible(self):
        dc = DeviceConfig(device="cpu", seed=3)
        a = dc.randn(2, 2, generator=dc.generator())
        b = dc.randn(2, 2, generator=dc.generator())
        assert a.dtype == torch.float64
        assert torch.equal(a, b)

    def test_no_seed_no_generator(self):
        assert DeviceConfig(device="cpu").generator() is None


class TestTasks:

    def test_accuracy_task(self):
        cfg = _cfg({
            "name": "accuracy",
            "sizes": [3, 5],
            "norms": [0.01, 1.0, 30.0],
            "order": 13,
            "tolerance": 1e-8,
        })
        results = AccuracyTask(cfg).run()
        assert len(results) == 6
        for r in results:
            assert r["err_expm"] < 1e-10
            assert r["err_generic"] < 1e-10
            assert r["err_paths"] < 1e-10

    def test_random_matrix_norm(self):
        task = AccuracyTask(_cfg({"name": "accuracy", "sizes": [4], "norms": [2.5]}))
        A = task.random_matrix(4, 2.5)
        assert torch.linalg.matrix_norm(A, ord=1).item() == pytest.approx(2.5)

    def test_benchmark_task(self):
        cfg = _cfg({"name": "benchmark", "sizes": [4], "norm": 10.0, "repeats": 2, "warmup": 1})
        results = BenchmarkTask(cfg).run()
        assert len(results) == 1
        assert results[0]["n"] == 4
        assert results[0]["fresh_ms"] > 0
        assert results[0]["reused_ms"] > 0
