# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Matrix Ring Element Wrapper.

Wraps a (batch of) square matrix tensor so that Python operators follow
matrix-algebra conventions, as the generic exponential expects:
``A * B`` is the matrix product, ``A + 2`` adds ``2 I``, ``A / B`` is right
division ``A B^-1`` and ``A ** k`` is the ``k``-th matrix power.
"""

import numbers

import torch


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Number) or (
        isinstance(value, torch.Tensor) and value.ndim == 0
    )


class MatrixElement:
    """Object-oriented wrapper for square matrix tensors.

    Scalars on either side of ``+``/``-`` act as scaled identities, so
    polynomials in a matrix can be written exactly as for numbers.

    Attributes:
        tensor (torch.Tensor): The raw matrix tensor [..., n, n].
    """

    def __init__(self, tensor: torch.Tensor):
        """Initializes a MatrixElement.

        Args:
            tensor (torch.Tensor): Square matrix or batch of square matrices.
        """
        if tensor.ndim < 2 or tensor.shape[-1] != tensor.shape[-2]:
            raise ValueError(
                f"MatrixElement expects [..., n, n], got shape {tuple(tensor.shape)}"
            )
        self.tensor = tensor

    @property
    def n(self) -> int:
        return self.tensor.shape[-1]

    def identity(self) -> torch.Tensor:
        """Identity matrix matching dtype and device (broadcasts over batches)."""
        return torch.eye(self.n, dtype=self.tensor.dtype, device=self.tensor.device)

    def __repr__(self):
        return f"MatrixElement(shape={tuple(self.tensor.shape)}, dtype={self.tensor.dtype})"

    def __add__(self, other):
        """Matrix sum; a scalar is added as ``other * I``."""
        if isinstance(other, MatrixElement):
            return MatrixElement(self.tensor + other.tensor)
        elif _is_scalar(other):
            return MatrixElement(self.tensor + other * self.identity())
        else:
            return NotImplemented

    __radd__ = __add__

    def __neg__(self):
        return MatrixElement(-self.tensor)

    def __sub__(self, other):
        if isinstance(other, MatrixElement) or _is_scalar(other):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other):
        if _is_scalar(other):
            return (-self) + other
        return NotImplemented

    def __mul__(self, other):
        """Matrix product (A * B); scalars scale every entry."""
        if isinstance(other, MatrixElement):
            return MatrixElement(torch.matmul(self.tensor, other.tensor))
        elif _is_scalar(other):
            return MatrixElement(self.tensor * other)
        else:
            return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return MatrixElement(other * self.tensor)
        return NotImplemented

    def __truediv__(self, other):
        """Right division ``A B^-1`` computed with a solve, or division by a scalar."""
        if isinstance(other, MatrixElement):
            return MatrixElement(torch.linalg.solve(other.tensor, self.tensor, left=False))
        elif _is_scalar(other):
            return MatrixElement(self.tensor / other)
        else:
            return NotImplemented

    def __pow__(self, k: int):
        """Non-negative integer matrix power (by repeated squaring)."""
        if not isinstance(k, int) or k < 0:
            return NotImplemented
        return MatrixElement(torch.linalg.matrix_power(self.tensor, k))

    def norm(self) -> float:
        """Largest 1-norm (max absolute column sum) over the batch."""
        if self.tensor.numel() == 0:
            return 0.0
        return torch.linalg.matrix_norm(self.tensor, ord=1).max().item()

    def sum(self) -> torch.Tensor:
        """Sum of all entries, as a 0-d tensor."""
        return self.tensor.sum()
