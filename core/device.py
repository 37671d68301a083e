# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Device and dtype configuration for Padexp tasks.

Centralises device resolution and the working floating dtype into a
single :class:`DeviceConfig` dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass

import torch

_DTYPES = {
    "float32": torch.float32,
    "float64": torch.float64,
    "complex64": torch.complex64,
    "complex128": torch.complex128,
}


def resolve_device(device: str = "auto") -> str:
    """Resolve ``'auto'`` to the best available accelerator.

    Priority: cuda > mps > cpu.
    """
    if device != "auto":
        return device
    if torch.cuda.is_available():
        return "cuda"
    if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
        return "mps"
    return "cpu"


def resolve_dtype(dtype: str | torch.dtype) -> torch.dtype:
    """Map a config string such as ``'float64'`` to a :class:`torch.dtype`."""
    if isinstance(dtype, torch.dtype):
        return dtype
    try:
        return _DTYPES[dtype]
    except KeyError:
        raise ValueError(f"Unknown dtype: {dtype}. Available: {list(_DTYPES)}") from None


@dataclass
class DeviceConfig:
    """Bag of device / precision settings.

    Attributes:
        device: Resolved device string (``cuda``, ``mps``, ``cpu``).
        dtype: Working dtype; config strings are resolved in ``__post_init__``.
        seed: Seed for :func:`torch.manual_seed`, ``None`` leaves the RNG alone.
    """

    device: str = "auto"
    dtype: str | torch.dtype = "float64"
    seed: int | None = None

    def __post_init__(self) -> None:
        self.device = resolve_device(self.device)
        self.dtype = resolve_dtype(self.dtype)

        # MPS has no float64 / complex128 support
        if self.device == "mps" and self.dtype in (torch.float64, torch.complex128):
            self.device = "cpu"

    def generator(self) -> torch.Generator | None:
        """Return a seeded CPU generator, or ``None`` when no seed is set."""
        if self.seed is None:
            return None
        return torch.Generator().manual_seed(self.seed)

    def randn(self, *shape: int, generator: torch.Generator | None = None) -> torch.Tensor:
        """Standard normal tensor on the configured device/dtype."""
        x = torch.randn(*shape, dtype=self.dtype, generator=generator)
        return x.to(self.device)
