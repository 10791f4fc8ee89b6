# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Experiment directories.

Layout of one run:
  experiments/<run_id>/
    config.json     frozen snapshot of the config that produced the run
    history.json    per-epoch metrics returned by fit()
    model/          model artifact (see training.checkpoint)

run_id is YYYYMMDD_HHMMSS_<seed>; a numeric suffix is added when two runs
start within the same second.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from kustom.config.schema import KustomConfig
from kustom.logging.logger import get_logger
from kustom.utils.filesystem import atomic_write

logger: logging.Logger = get_logger(__name__)


def create_experiment_dir(
    experiments_root: Path,
    config: KustomConfig,
    seed: int,
) -> Path:
    """
    Create a fresh run directory under ``experiments_root`` and snapshot
    ``config`` into it.

    Returns:
        Path to the new directory.
    """
    timestamp = datetime.now(tz=timezone.utc).strftime("%Y%m%d_%H%M%S")
    run_id = f"{timestamp}_{seed}"
    experiment_dir = experiments_root / run_id
    suffix = 1
    while experiment_dir.exists():
        experiment_dir = experiments_root / f"{run_id}_{suffix}"
        suffix += 1

    experiment_dir.mkdir(parents=True)

    snapshot = config.model_dump(by_alias=True)
    atomic_write(
        experiment_dir / "config.json",
        json.dumps(snapshot, indent=2, default=str),
    )

    logger.info(
        "Experiment directory created",
        extra={"run_id": experiment_dir.name, "path": str(experiment_dir)},
    )
    return experiment_dir


def find_experiment_dir(
    experiments_root: Path,
    run_id: str | None = None,
) -> Path | None:
    """
    Return the directory for ``run_id``, or the most recent run when
    ``run_id`` is None. Returns None when nothing matches.
    """
    if not experiments_root.is_dir():
        return None

    if run_id is not None:
        target = experiments_root / run_id
        return target if target.is_dir() else None

    runs = sorted(
        (d for d in experiments_root.iterdir() if d.is_dir() and not d.name.startswith(".")),
        key=lambda d: d.stat().st_mtime,
        reverse=True,
    )
    return runs[0] if runs else None
