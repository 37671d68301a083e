# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Destructive matrix exponential by scaling and squaring.

Algorithm 10.20 of Higham (2008), "Functions of Matrices: Theory and
Computation", SIAM: balance, pick a Pade order from the 1-norm, scale by a
power of two when the norm is large, evaluate the approximant with one
solve, square back and undo the balancing.
"""

import math
from typing import Iterable, Optional, Union

import torch

from core.balance import balance_, unbalance_
from core.pade import MAX_ORDER, SCALING_THRESHOLD, evaluate_uv_, select_order, table_for
from core.solve import solve_
from core.validation import check_dtype, check_square, check_workspace
from core.workspace import ExpmWorkspace
from log import get_logger

logger = get_logger(__name__)

Workspace = Union[ExpmWorkspace, Iterable[torch.Tensor]]


def squarings_for(norm: float) -> int:
    """Number of halvings needed to bring ``norm`` under :data:`SCALING_THRESHOLD`."""
    s = math.log2(norm / SCALING_THRESHOLD)
    return math.ceil(s) if s > 0 else 0


def square_(X: torch.Tensor, temp: torch.Tensor, s: int) -> torch.Tensor:
    """Replace ``X`` by ``X^(2^s)`` using ``temp`` as the product buffer."""
    for _ in range(s):
        torch.matmul(X, X, out=temp)
        X.copy_(temp)
    return X


@torch.no_grad()
def expm_(A: torch.Tensor, workspace: Optional[Workspace] = None) -> torch.Tensor:
    """Overwrite ``A`` with (approximately) ``exp(A)``.

    The input buffer is used as working storage: its previous contents are
    gone after the call and the returned tensor is ``A`` itself.  Pass an
    :class:`ExpmWorkspace` (or any five ``n x n`` tensors) to avoid
    allocating scratch space on every call.

    Args:
        A (torch.Tensor): Square matrix [n, n] of dtype float32, float64,
            complex64 or complex128.
        workspace: Optional scratch buffers ``(A2, P, U, V, temp)`` with
            the shape, dtype and device of ``A``.

    Returns:
        torch.Tensor: ``A``, holding ``exp(A)``.

    Raises:
        DimensionMismatch: If ``A`` is not square or the workspace does not fit.
        SingularMatrixError: If the Pade denominator is exactly singular.
    """
    n = check_square(A)
    check_dtype(A)
    if n == 0:
        return A

    if workspace is None:
        workspace = ExpmWorkspace.like(A)
    buffers = tuple(workspace)
    check_workspace(buffers, n, A.dtype, A.device)
    A2, P, U, V, temp = buffers

    X = A
    balance = balance_(A)
    nA = torch.linalg.matrix_norm(A, ord=1).item()

    order = select_order(nA)
    s = 0
    if order == MAX_ORDER:
        s = squarings_for(nA)
        if s > 0:
            A.div_(2.0 ** s)
    logger.debug("expm_: n=%d norm=%.4g order=%d squarings=%d", n, nA, order, s)

    U, V, temp = evaluate_uv_(A, table_for(order), A2, P, U, V, temp)
    torch.add(V, U, out=X)
    torch.sub(V, U, out=temp)
    solve_(temp, X)

    square_(X, temp, s)
    return unbalance_(X, balance)


def expm(A: torch.Tensor, workspace: Optional[Workspace] = None) -> torch.Tensor:
    """Non-destructive :func:`expm_`: ``A`` is left unchanged.

    Args:
        A (torch.Tensor): Square matrix [n, n].
        workspace: Optional scratch buffers, see :func:`expm_`.

    Returns:
        torch.Tensor: A new tensor holding ``exp(A)``.
    """
    return expm_(A.detach().clone(memory_format=torch.contiguous_format), workspace)
