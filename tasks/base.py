# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

import torch
from omegaconf import DictConfig
from tqdm import tqdm

from core.device import DeviceConfig
from log import get_logger

logger = get_logger(__name__)


class BaseTask(ABC):
    """Abstract base class for evaluation tasks.

    Lifecycle: cases → run_case (per case, with a progress bar) → summarize.

    Attributes:
        cfg (DictConfig): Hydra configuration (task settings under ``cfg.task``).
        device_config (DeviceConfig): Device, dtype and seed.
        device (str): Computation device.
        dtype (torch.dtype): Working dtype.
    """

    def __init__(self, cfg: DictConfig):
        """Sets up the task.

        Args:
            cfg (DictConfig): Hydra config.
        """
        self.cfg = cfg
        self.device_config = DeviceConfig(
            device=cfg.get('device', 'auto'),
            dtype=cfg.get('dtype', 'float64'),
            seed=cfg.get('seed', None),
        )
        self.device = self.device_config.device
        self.dtype = self.device_config.dtype
        self.generator = self.device_config.generator()

    def random_matrix(self, n: int, norm: float) -> torch.Tensor:
        """Gaussian ``n x n`` matrix rescaled to the given 1-norm."""
        A = self.device_config.randn(n, n, generator=self.generator)
        A_norm = torch.linalg.matrix_norm(A, ord=1)
        return A * (norm / A_norm)

    @abstractmethod
    def cases(self) -> Iterable:
        """Enumerate the cases to run."""
        pass

    @abstractmethod
    def run_case(self, case) -> Dict[str, float]:
        """Run one case and return its metrics."""
        pass

    @abstractmethod
    def summarize(self, results: List[Dict[str, float]]) -> None:
        """Report over all cases."""
        pass

    def run(self) -> List[Dict[str, float]]:
        """Execute every case and summarize."""
        logger.info("Starting Task: %s (device=%s, dtype=%s)",
                    self.cfg.task.name, self.device, self.dtype)
        results = []
        pbar = tqdm(list(self.cases()))
        for case in pbar:
            logs = self.run_case(case)
            results.append(logs)
            pbar.set_description(" | ".join(f"{k}: {v:.3g}" for k, v in logs.items()))

        self.summarize(results)
        logger.info("Task Complete.")
        return results
