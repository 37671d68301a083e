"""Padexp: scaling-and-squaring matrix exponential for PyTorch."""

__version__ = "0.1.0"

from core.expm import expm, expm_
from core.generic import exp_generic
from core.workspace import ExpmWorkspace

__all__ = [
    "__version__",
    "expm",
    "expm_",
    "exp_generic",
    "ExpmWorkspace",
]
