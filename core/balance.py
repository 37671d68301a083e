# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Matrix balancing and its inverse.

Balancing applies a similarity transform ``D^-1 P^T A P D`` (row/column
permutations followed by diagonal scaling) that isolates any existing
block-triangular structure and evens out row and column norms.  The
exponential commutes with similarity transforms, so ``exp(A)`` is
recovered from the exponential of the balanced matrix by undoing the
transform on the result.

The balancing itself is LAPACK ``xGEBAL`` with job ``'B'``.

Reference:
    Parlett, B. N. & Reinsch, C. (1969). "Balancing a matrix for
    calculation of eigenvalues and eigenvectors." Numer. Math. 13, 293-304.
"""

from dataclasses import dataclass

import numpy as np
import torch
from scipy.linalg.lapack import get_lapack_funcs


@dataclass(frozen=True)
class BalanceResult:
    """Record of a balancing transform.

    Attributes:
        ilo: First row/column of the unreduced block (0-based).
        ihi: Last row/column of the unreduced block (0-based, inclusive).
        scale: Length-n array. Inside ``[ilo, ihi]`` an entry is the
            diagonal scale factor; outside it is the 1-based index the
            row/column was swapped with.
    """

    ilo: int
    ihi: int
    scale: np.ndarray


def balance_(A: torch.Tensor) -> BalanceResult:
    """Balance the square matrix ``A`` in place.

    The data makes a round trip through host memory, so any device works.

    Args:
        A (torch.Tensor): Square matrix [n, n]; overwritten with the
            balanced matrix.

    Returns:
        BalanceResult: What :func:`unbalance_` needs to invert the transform.
    """
    a = A.detach().cpu().resolve_conj().resolve_neg().numpy()
    gebal = get_lapack_funcs('gebal', (a,))
    ba, lo, hi, pivscale, info = gebal(a, scale=1, permute=1)
    if info < 0:
        raise ValueError(
            'xGEBAL exited with the internal error "illegal value in argument '
            f'number {-info}."'
        )
    A.copy_(torch.from_numpy(ba))
    return BalanceResult(int(lo), int(hi), np.asarray(pivscale, dtype=np.float64))


def rcswap_(X: torch.Tensor, i: int, j: int) -> None:
    """Swap rows ``i`` and ``j`` of ``X``, then columns ``i`` and ``j``."""
    if i == j:
        return
    X[[i, j], :] = X[[j, i], :]
    X[:, [i, j]] = X[:, [j, i]]


def unbalance_(X: torch.Tensor, balance: BalanceResult) -> torch.Tensor:
    """Undo a balancing transform on ``X`` in place.

    The diagonal scaling is reversed first.  Then the permutations are
    reversed in the opposite order to how ``xGEBAL`` applied them: the
    swaps recorded below ``ilo`` from ``ilo - 1`` down to 0, then the
    swaps recorded above ``ihi`` from ``ihi + 1`` up to ``n - 1``.

    Args:
        X (torch.Tensor): Matrix computed from the balanced input [n, n].
        balance (BalanceResult): Output of :func:`balance_`.

    Returns:
        torch.Tensor: ``X`` itself.
    """
    n = X.shape[0]
    lo, hi, scale = balance.ilo, balance.ihi, balance.scale

    d = torch.as_tensor(scale[lo:hi + 1].copy(), device=X.device).to(X.dtype)
    X[lo:hi + 1, :].mul_(d.unsqueeze(-1))
    X[:, lo:hi + 1].div_(d)

    for j in range(lo - 1, -1, -1):
        rcswap_(X, j, int(scale[j]) - 1)
    for j in range(hi + 1, n):
        rcswap_(X, j, int(scale[j]) - 1)
    return X
