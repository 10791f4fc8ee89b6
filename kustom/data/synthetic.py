# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Random classification data for exercising a model end to end.

Inputs are uniform on [0, 1). Labels are ``round(uniform(0, num_classes - 1))``,
so the two edge classes are drawn half as often as the inner ones; the
labels are one-hot encoded with ``keras.utils.to_categorical``. The data
carries no signal, and a run only shows that the wiring works.
"""

from dataclasses import dataclass

import keras
import numpy as np


@dataclass(frozen=True)
class SyntheticDataset:
    """Feature matrix, one-hot targets, and the integer labels behind them."""

    x: np.ndarray
    y: np.ndarray
    labels: np.ndarray

    @property
    def n_samples(self) -> int:
        return int(self.x.shape[0])

    @property
    def n_features(self) -> int:
        return int(self.x.shape[1])

    @property
    def num_classes(self) -> int:
        return int(self.y.shape[1])


def make_classification_data(
    n_samples: int = 1000,
    n_features: int = 100,
    num_classes: int = 10,
    seed: int | None = None,
) -> SyntheticDataset:
    """
    Draw a dataset from a private generator seeded with ``seed``.

    The global numpy RNG is left alone, so calling this does not shift the
    random stream Keras uses for weight initialization.

    Raises:
        ValueError: If a size is not positive or ``num_classes`` < 2.
    """
    if n_samples < 1:
        raise ValueError(f"n_samples must be >= 1, got {n_samples}")
    if n_features < 1:
        raise ValueError(f"n_features must be >= 1, got {n_features}")
    if num_classes < 2:
        raise ValueError(f"num_classes must be >= 2, got {num_classes}")

    rng = np.random.default_rng(seed)
    x = rng.uniform(0.0, 1.0, size=(n_samples, n_features)).astype(np.float32)
    labels = np.round(rng.uniform(0.0, num_classes - 1, size=n_samples)).astype(np.int64)
    y = keras.utils.to_categorical(labels, num_classes=num_classes).astype(np.float32)
    return SyntheticDataset(x=x, y=y, labels=labels)
