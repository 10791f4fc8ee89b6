# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured epoch metrics.

Keras's fit() loop owns the training; this callback only observes it. At the
end of every epoch it records whatever ``logs`` Keras produced (loss, the
compiled metrics, and val_* entries when a validation split is set) and,
every ``log_interval`` epochs, emits them as one JSON log line.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import keras

from kustom.logging.logger import get_logger

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class EpochMetrics:
    """Metrics for one completed epoch. ``epoch`` is 1-based."""

    epoch: int
    seconds: float
    values: dict[str, float] = field(default_factory=dict)


class MetricsLogger(keras.callbacks.Callback):
    """
    Log per-epoch metrics through the JSON logger.

    Args:
        log_interval: Emit a log line every N epochs. Every epoch is still
            recorded in ``records``.
    """

    def __init__(self, log_interval: int = 1) -> None:
        super().__init__()
        if log_interval < 1:
            raise ValueError(f"log_interval must be >= 1, got {log_interval}")
        self.log_interval = log_interval
        self.records: list[EpochMetrics] = []
        self._train_start = 0.0
        self._epoch_start = 0.0

    def on_train_begin(self, logs: dict[str, Any] | None = None) -> None:
        self.records = []
        self._train_start = time.monotonic()
        params = self.params or {}
        logger.info(
            "Training started",
            extra={"epochs": params.get("epochs"), "steps_per_epoch": params.get("steps")},
        )

    def on_epoch_begin(self, epoch: int, logs: dict[str, Any] | None = None) -> None:
        self._epoch_start = time.monotonic()

    def on_epoch_end(self, epoch: int, logs: dict[str, Any] | None = None) -> None:
        values = {key: float(value) for key, value in (logs or {}).items()}
        record = EpochMetrics(
            epoch=epoch + 1,
            seconds=time.monotonic() - self._epoch_start,
            values=values,
        )
        self.records.append(record)

        if record.epoch % self.log_interval == 0:
            logger.info(
                "Epoch finished",
                extra={
                    "epoch": record.epoch,
                    "seconds": round(record.seconds, 3),
                    **{key: round(value, 6) for key, value in values.items()},
                },
            )

    def on_train_end(self, logs: dict[str, Any] | None = None) -> None:
        logger.info(
            "Training finished",
            extra={
                "epochs_run": len(self.records),
                "seconds": round(time.monotonic() - self._train_start, 3),
            },
        )
