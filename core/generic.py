# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Generic exponential by recursive scaling and squaring.

Works on any value that behaves like an element of a normed ring:
Python numbers, 0-d tensors, :class:`~core.element.MatrixElement` and any
user type implementing the :class:`RingElement` protocol.  Unlike
:func:`core.expm.expm_` it allocates freely, never mutates its argument
and is differentiable when the element's operations are.

Reference:
    Higham, N. J. (2005). "The scaling and squaring method for the matrix
    exponential revisited." SIAM J. Matrix Anal. Appl. 26(4), 1179-1193.
"""

import math
from typing import Protocol, TypeVar

import torch

from core.element import MatrixElement
from core.pade import MAX_ORDER, pade_coefficients

T = TypeVar("T")


class RingElement(Protocol):
    """What :func:`exp_generic` needs from its argument.

    Adding or subtracting a scalar must add a scaled identity.  ``norm``
    should return a 1-norm-like float; types without it fall back to
    ``abs``.  ``sum`` (optional) is only used to propagate non-finite
    values.
    """

    def __add__(self, other): ...
    def __sub__(self, other): ...
    def __neg__(self): ...
    def __mul__(self, other): ...
    def __truediv__(self, other): ...
    def __pow__(self, k: int): ...


def opnorm(x) -> float:
    """1-norm of a ring element, ``abs`` for plain numbers."""
    return float(x.norm() if hasattr(x, "norm") else abs(x))


def entry_sum(x):
    """Sum of all entries; a scalar is its own sum."""
    return x.sum() if hasattr(x, "sum") else x


def pade_numerator(x: T, k: int, m: int) -> T:
    """Numerator of the ``(k, m)`` Pade approximant of ``exp`` at ``x``.

    Horner's scheme over the exact coefficients from
    :func:`~core.pade.pade_coefficients`, converted to floats.  The
    constant term is added as a scalar, which ring elements interpret as
    a scaled identity.
    """
    p = [float(c) for c in pade_coefficients(k, m)]
    if k == 0:
        return x * 0.0 + p[0]
    result = x * p[k] + p[k - 1]
    for c in reversed(p[:k - 1]):
        result = result * x + c
    return result


def pade_denominator(x: T, k: int, m: int) -> T:
    """Denominator of the ``(k, m)`` Pade approximant: ``p_{m,k}(-x)``."""
    return pade_numerator(-x, m, k)


def exp_generic(x: T, order: int = MAX_ORDER) -> T:
    """Exponential of any ring element via the diagonal Pade approximant.

    Scales ``x`` by ``2^-s`` so its norm is at most 1, evaluates the
    ``(order, order)`` approximant and squares the result back ``s`` times.
    A raw tensor with ``ndim >= 2`` is treated as a (batch of) matrices and
    returned as a tensor.  Overflow during squaring gives ``inf`` rather
    than an exception.

    Args:
        x: Number, 0-d tensor, square matrix tensor [..., n, n] or any
            :class:`RingElement`.
        order (int, optional): Degree of numerator and denominator.
            Defaults to 13.

    Returns:
        ``exp(x)``, of the same type as ``x``.  If the norm of ``x`` is not
        finite the result is non-finite too: entries where ``Inf`` meets
        ``0`` come out as ``NaN`` instead of cancelling.

    Raises:
        ValueError: If ``order`` is not a positive integer.
    """
    if not isinstance(order, int) or order < 1:
        raise ValueError(f"order must be a positive integer, got {order!r}")

    if isinstance(x, torch.Tensor) and x.ndim >= 2:
        return exp_generic(MatrixElement(x), order).tensor

    nx = opnorm(x)
    if not math.isfinite(nx):
        return x * entry_sum(x * nx)

    s = 0 if nx <= 1 else math.ceil(math.log2(nx))
    if s > 0:
        x = x * 2.0 ** -s

    y = pade_numerator(x, order, order) / pade_denominator(x, order, order)
    for _ in range(s):
        y = y * y
    return y
