# Padexp: Scaling-and-Squaring Matrix Exponential
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Padexp CLI Entry Point.

Dispatches evaluation tasks:
    python main.py task=accuracy
    python main.py task=benchmark dtype=float32
"""

import hydra
from omegaconf import DictConfig

from log import configure
from tasks.accuracy import AccuracyTask
from tasks.benchmark import BenchmarkTask

TASKS = {
    'accuracy': AccuracyTask,
    'benchmark': BenchmarkTask,
}


def get_task(cfg: DictConfig):
    """Instantiate the task named by ``cfg.task.name``."""
    task_name = cfg.task.name
    if task_name not in TASKS:
        raise ValueError(f"Unknown task: {task_name}. Available: {list(TASKS.keys())}")
    return TASKS[task_name](cfg)


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig):
    """Runs the configured task.

    Args:
        cfg (DictConfig): Composed Hydra config.
    """
    configure(cfg.get("log_level"), cfg.get("log_file"))
    get_task(cfg).run()


if __name__ == "__main__":
    main()
