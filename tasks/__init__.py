"""Evaluation tasks for Padexp.

Each task inherits from :class:`BaseTask` and implements
cases, run_case and summarize.
"""

from .base import BaseTask
from .accuracy import AccuracyTask
from .benchmark import BenchmarkTask

__all__ = [
    "BaseTask",
    "AccuracyTask",
    "BenchmarkTask",
]
