# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Timing of the destructive path with and without a reused workspace."""

import time

import torch

from core.expm import expm_
from core.workspace import ExpmWorkspace
from log import get_logger
from tasks.base import BaseTask

logger = get_logger(__name__)


class BenchmarkTask(BaseTask):

    def cases(self):
        return self.cfg.task.sizes

    def _sync(self):
        if self.device.startswith('cuda'):
            torch.cuda.synchronize()

    def _time(self, A: torch.Tensor, workspace=None) -> float:
        """Mean seconds per ``expm_`` call on fresh copies of ``A``."""
        repeats = self.cfg.task.get('repeats', 20)
        for _ in range(self.cfg.task.get('warmup', 3)):
            expm_(A.clone(), workspace)
        copies = [A.clone() for _ in range(repeats)]
        self._sync()
        start = time.perf_counter()
        for X in copies:
            expm_(X, workspace)
        self._sync()
        return (time.perf_counter() - start) / repeats

    def run_case(self, n):
        A = self.random_matrix(n, self.cfg.task.get('norm', 10.0))
        workspace = ExpmWorkspace.like(A)
        return {
            'n': n,
            'fresh_ms': 1e3 * self._time(A),
            'reused_ms': 1e3 * self._time(A, workspace),
            'matrix_exp_ms': 1e3 * self._time_reference(A),
        }

    def _time_reference(self, A: torch.Tensor) -> float:
        repeats = self.cfg.task.get('repeats', 20)
        self._sync()
        start = time.perf_counter()
        for _ in range(repeats):
            torch.linalg.matrix_exp(A)
        self._sync()
        return (time.perf_counter() - start) / repeats

    def summarize(self, results):
        for r in results:
            logger.info("n=%d | fresh %.3f ms | reused workspace %.3f ms | matrix_exp %.3f ms",
                        r['n'], r['fresh_ms'], r['reused_ms'], r['matrix_exp_ms'])
