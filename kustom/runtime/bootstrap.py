# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
One-time setup run by every CLI command before it touches a model.

Sequence:
  1. Validate the interpreter
  2. Seed every RNG a training run draws from
  3. Configure the package logger: level, stdout, optional file mirror
  4. Log a startup record describing the environment
"""

import logging
import os
import random
from pathlib import Path

import keras
import numpy as np
import torch

from kustom.config.schema import GlobalConfig
from kustom.logging.logger import configure_logging, get_logger
from kustom.runtime.environment import check_minimum_python, get_system_info


def set_deterministic_seed(seed: int) -> None:
    """
    Seed python's ``random``, numpy, torch and Keras with ``seed``.

    On a GPU the CUDA generators are seeded too and cuDNN is switched to
    deterministic kernels.
    """
    if seed < 0:
        raise ValueError(f"seed must be >= 0, got {seed}")

    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)
        torch.backends.cudnn.deterministic = True  # type: ignore[attr-defined]
        torch.backends.cudnn.benchmark = False  # type: ignore[attr-defined]
    keras.utils.set_random_seed(seed)


def bootstrap(config: GlobalConfig, project_root: Path | None = None) -> logging.Logger:
    """
    Put the process in a known state and return the runtime logger.

    Args:
        config: Validated global section of the config.
        project_root: Base for a relative ``log_file``. Defaults to the cwd.
    """
    check_minimum_python()
    set_deterministic_seed(config.seed)

    log_file = None
    if config.log_file is not None:
        log_file = Path(config.log_file)
        if not log_file.is_absolute():
            log_file = (project_root or Path.cwd()) / log_file

    configure_logging(config.log_level, log_file=log_file)
    logger = get_logger("kustom.runtime")

    info = get_system_info()
    logger.info(
        "kustom bootstrap complete",
        extra={
            "project": config.project_name,
            "seed": config.seed,
            "python_version": info.python_version,
            "platform": info.platform,
            "keras_version": info.keras_version,
            "keras_backend": info.keras_backend,
        },
    )
    return logger
