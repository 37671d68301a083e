# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Diagonal Pade approximants of the exponential.

Holds the fixed coefficient tables used by the destructive matrix path,
the norm thresholds that pick one of them, the buffer-reusing evaluator
for the ``U``/``V`` pair, and the exact coefficient generator used by the
generic path.

Reference:
    Higham, N. J. (2005). "The scaling and squaring method for the matrix
    exponential revisited." SIAM J. Matrix Anal. Appl. 26(4), 1179-1193.
"""

from fractions import Fraction
from functools import lru_cache
from math import factorial
from typing import Sequence, Tuple

import torch

# Integer coefficients c[0..m] of the degree-m numerator, scaled so the
# leading coefficient is 1.  Even entries feed V, odd entries feed U.
PADE_TABLES = {
    3: (120, 60, 12, 1),
    5: (30240, 15120, 3360, 420, 30, 1),
    7: (17297280, 8648640, 1995840, 277200, 25200, 1512, 56, 1),
    9: (17643225600, 8821612800, 2075673600, 302702400, 30270240,
        2162160, 110880, 3960, 90, 1),
    13: (64764752532480000, 32382376266240000, 7771770303897600,
         1187353796428800, 129060195264000, 10559470521600,
         670442572800, 33522128640, 1323241920, 40840800,
         960960, 16380, 182, 1),
}

# (upper norm bound, order) for the orders that need no scaling.
ORDER_THRESHOLDS = (
    (0.015, 3),
    (0.25, 5),
    (0.95, 7),
    (2.1, 9),
)

# Order-13 evaluations are accurate up to this 1-norm.
SCALING_THRESHOLD = 5.4

MAX_ORDER = 13


def select_order(norm: float) -> int:
    """Pick the Pade order for a matrix with the given 1-norm.

    Bounds are inclusive: a norm of exactly 0.25 selects order 5.
    Anything above 2.1 selects order 13, which must be combined with
    scaling and squaring.
    """
    for bound, order in ORDER_THRESHOLDS:
        if norm <= bound:
            return order
    return MAX_ORDER


def table_for(order: int) -> Tuple[float, ...]:
    """Return the coefficient table for ``order`` as Python floats."""
    try:
        table = PADE_TABLES[order]
    except KeyError:
        raise ValueError(
            f"No fixed Pade table for order {order}. Available: {sorted(PADE_TABLES)}"
        ) from None
    return tuple(float(c) for c in table)


@lru_cache(maxsize=None)
def pade_coefficients(k: int, m: int) -> Tuple[Fraction, ...]:
    """Exact numerator coefficients of the ``(k, m)`` Pade approximant of exp.

    ``p_j = (k + m - j)! k! / ((k + m)! (k - j)! j!)`` for ``j = 0..k``.
    The denominator of the ``(k, m)`` approximant is the numerator of the
    ``(m, k)`` one evaluated at ``-x``.
    """
    if k < 0 or m < 0:
        raise ValueError(f"Pade degrees must be non-negative, got ({k}, {m})")
    return tuple(
        Fraction(factorial(k + m - j) * factorial(k),
                 factorial(k + m) * factorial(k - j) * factorial(j))
        for j in range(k + 1)
    )


def evaluate_uv_(
    A: torch.Tensor,
    C: Sequence[float],
    A2: torch.Tensor,
    P: torch.Tensor,
    U: torch.Tensor,
    V: torch.Tensor,
    temp: torch.Tensor,
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
    """Evaluate the odd part ``U`` and even part ``V`` of a Pade numerator.

    ``P`` runs through the even powers ``I, A^2, A^4, ...`` while ``U``
    and ``V`` collect the odd and even coefficients, then ``U`` is
    multiplied by ``A`` once at the end.
    ``P`` and ``temp`` swap roles after each product instead of copying,
    and so do ``U`` and ``temp`` at the end.  ``A`` is left untouched.

    Args:
        A: Matrix to approximate ``exp`` of [n, n].
        C: Coefficient table of even length (see :data:`PADE_TABLES`).
        A2, P, U, V, temp: Scratch buffers [n, n]; all are overwritten.

    Returns:
        ``(U, V, spare)``: the buffers now holding ``U`` and ``V`` and the
        buffer that is free for reuse.  ``exp(A) ~= (V - U)^-1 (V + U)``.
    """
    torch.matmul(A, A, out=A2)
    P.zero_()
    P.diagonal().fill_(1)
    torch.mul(P, C[1], out=U)
    torch.mul(P, C[0], out=V)
    for k in range(1, len(C) // 2):
        k2 = 2 * k
        torch.matmul(P, A2, out=temp)
        P, temp = temp, P  # P = P @ A2
        U.add_(P, alpha=C[k2 + 1])
        V.add_(P, alpha=C[k2])
    torch.matmul(A, U, out=temp)
    U, temp = temp, U  # U = A @ U
    return U, V, temp
