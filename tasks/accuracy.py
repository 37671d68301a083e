# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Accuracy sweep across the Pade order regimes."""

from itertools import product

import torch

from core.expm import expm
from core.generic import exp_generic
from log import get_logger
from tasks.base import BaseTask

logger = get_logger(__name__)


def relative_error(X: torch.Tensor, ref: torch.Tensor) -> float:
    """Frobenius-norm relative error of ``X`` against ``ref``."""
    return (torch.linalg.norm(X - ref) / torch.linalg.norm(ref)).item()


class AccuracyTask(BaseTask):
    """Compares ``expm``, ``exp_generic`` and ``torch.linalg.matrix_exp``.

    One random matrix per (size, norm) pair; the norms are chosen around
    each order threshold so every branch of the destructive path is hit.
    """

    def cases(self):
        return product(self.cfg.task.sizes, self.cfg.task.norms)

    def run_case(self, case):
        n, norm = case
        A = self.random_matrix(n, norm)
        ref = torch.linalg.matrix_exp(A)
        X = expm(A)
        G = exp_generic(A, order=self.cfg.task.get('order', 13))
        return {
            'n': n,
            'norm': norm,
            'err_expm': relative_error(X, ref),
            'err_generic': relative_error(G, ref),
            'err_paths': relative_error(X, G),
        }

    def summarize(self, results):
        tol = self.cfg.task.get('tolerance', 1e-8)
        failures = 0
        for r in results:
            logger.info(
                "n=%d norm=%.3g | expm %.2e | generic %.2e | paths %.2e",
                r['n'], r['norm'],
                r['err_expm'], r['err_generic'], r['err_paths'],
            )
            worst = max(r['err_expm'], r['err_generic'], r['err_paths'])
            if not worst <= tol:
                failures += 1
                logger.warning("n=%d norm=%.3g exceeds tolerance %.1e (%.2e)",
                               r['n'], r['norm'], tol, worst)
        logger.info("%d/%d cases within tolerance", len(results) - failures, len(results))
