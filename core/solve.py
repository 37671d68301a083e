# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Dense solve for the Pade quotient ``(V - U)^-1 (V + U)``."""

import torch

from core.validation import SingularMatrixError


def solve_(Vminus: torch.Tensor, Vplus: torch.Tensor) -> torch.Tensor:
    """Solve ``Vminus @ X = Vplus`` without forming an inverse.

    Both operands are consumed, matching LAPACK ``xGESV``: ``Vminus`` is
    overwritten with its packed LU factors and ``Vplus`` with ``X``.

    Args:
        Vminus (torch.Tensor): Coefficient matrix [n, n].
        Vplus (torch.Tensor): Right-hand side [n, n].

    Returns:
        torch.Tensor: ``Vplus``, now holding the solution.

    Raises:
        SingularMatrixError: If the LU factorisation hits an exactly zero pivot.
    """
    LU, pivots, info = torch.linalg.lu_factor_ex(Vminus)
    if info.item() > 0:
        raise SingularMatrixError(
            f"V - U is exactly singular: U[{info.item()}, {info.item()}] is zero "
            "in its LU factorisation"
        )
    Vplus.copy_(torch.linalg.lu_solve(LU, pivots, Vplus))
    Vminus.copy_(LU)
    return Vplus
