# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Input validation and error types for the exponential kernels.

The square-matrix precondition is always enforced.  The cheaper
bookkeeping checks (workspace layout) can be switched off with
``VALIDATE = False``.
"""

import torch

VALIDATE = True

SUPPORTED_DTYPES = (torch.float32, torch.float64, torch.complex64, torch.complex128)


class DimensionMismatch(ValueError):
    """Raised when a matrix or workspace buffer has the wrong shape."""


class SingularMatrixError(torch.linalg.LinAlgError):
    """Raised when the Pade denominator ``V - U`` is exactly singular."""


def check_square(x: torch.Tensor, name: str = "A") -> int:
    """Return ``n`` for an ``n x n`` tensor, raise :class:`DimensionMismatch` otherwise."""
    if x.ndim != 2:
        raise DimensionMismatch(
            f"{name}: expected a 2-D matrix, got shape {tuple(x.shape)}"
        )
    rows, cols = x.shape
    if rows != cols:
        raise DimensionMismatch(
            f"{name}: matrix is not square, dimensions are {tuple(x.shape)}"
        )
    return rows


def check_dtype(x: torch.Tensor, name: str = "A") -> None:
    """Reject dtypes that LAPACK balancing and the solver cannot handle."""
    if x.dtype not in SUPPORTED_DTYPES:
        raise TypeError(
            f"{name}: dtype {x.dtype} is not supported, expected one of "
            f"{', '.join(str(d) for d in SUPPORTED_DTYPES)}"
        )


def check_workspace(buffers, n: int, dtype: torch.dtype, device: torch.device) -> None:
    """Check that every scratch buffer is ``n x n`` with the matrix's dtype/device.

    Buffers are never resized, a mismatch is an error.
    """
    if not VALIDATE:
        return
    if len(buffers) != 5:
        raise DimensionMismatch(
            f"workspace: expected 5 scratch buffers, got {len(buffers)}"
        )
    for name, buf in zip(("A2", "P", "U", "V", "temp"), buffers):
        if tuple(buf.shape) != (n, n):
            raise DimensionMismatch(
                f"workspace.{name}: expected shape {(n, n)}, got {tuple(buf.shape)}"
            )
        if buf.dtype != dtype:
            raise TypeError(
                f"workspace.{name}: expected dtype {dtype}, got {buf.dtype}"
            )
        if buf.device != device:
            raise TypeError(
                f"workspace.{name}: expected device {device}, got {buf.device}"
            )
