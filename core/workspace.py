# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Caller-owned scratch space for the destructive exponential.

An :class:`ExpmWorkspace` is allocated once and handed to every
:func:`core.expm.expm_` call on matrices of the same size, dtype and
device.  The buffers carry no state between calls; their contents are
overwritten freely.  Sharing one workspace between threads requires
external locking.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterator

import torch


@dataclass
class ExpmWorkspace:
    """Five ``n x n`` scratch buffers.

    Attributes:
        A2: Holds ``A @ A``.
        P: Running even power of ``A``.
        U: Odd-power (numerator) accumulator.
        V: Even-power (denominator) accumulator.
        temp: Spare buffer that trades roles with ``P``/``U``.
    """

    A2: torch.Tensor
    P: torch.Tensor
    U: torch.Tensor
    V: torch.Tensor
    temp: torch.Tensor

    @classmethod
    def allocate(cls, n: int, dtype: torch.dtype = torch.float64,
                 device: str | torch.device = "cpu") -> ExpmWorkspace:
        """Allocate uninitialised buffers for ``n x n`` matrices."""
        return cls(*(torch.empty(n, n, dtype=dtype, device=device) for _ in range(5)))

    @classmethod
    def like(cls, A: torch.Tensor) -> ExpmWorkspace:
        """Allocate buffers matching the shape, dtype and device of ``A``."""
        return cls.allocate(A.shape[-1], dtype=A.dtype, device=A.device)

    @property
    def n(self) -> int:
        return self.A2.shape[-1]

    def __iter__(self) -> Iterator[torch.Tensor]:
        return (getattr(self, f.name) for f in fields(self))

    def __len__(self) -> int:
        return 5
