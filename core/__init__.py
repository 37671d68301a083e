# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Core numerical kernel for the matrix exponential.

Provides the destructive buffer-reusing exponential, the generic
recursive exponential, the Pade tables, balancing, and the scratch
workspace.
"""

from .expm import expm, expm_, squarings_for
from .generic import exp_generic, pade_numerator, pade_denominator, RingElement
from .element import MatrixElement
from .workspace import ExpmWorkspace
from .balance import BalanceResult, balance_, unbalance_
from .pade import (
    PADE_TABLES,
    ORDER_THRESHOLDS,
    SCALING_THRESHOLD,
    select_order,
    pade_coefficients,
)
from .validation import DimensionMismatch, SingularMatrixError
from .device import DeviceConfig, resolve_device

__all__ = [
    # exponentials
    "expm",
    "expm_",
    "exp_generic",
    # building blocks
    "squarings_for",
    "pade_numerator",
    "pade_denominator",
    "pade_coefficients",
    "select_order",
    "balance_",
    "unbalance_",
    "BalanceResult",
    "PADE_TABLES",
    "ORDER_THRESHOLDS",
    "SCALING_THRESHOLD",
    # types
    "MatrixElement",
    "RingElement",
    "ExpmWorkspace",
    # errors
    "DimensionMismatch",
    "SingularMatrixError",
    # device
    "DeviceConfig",
    "resolve_device",
]
