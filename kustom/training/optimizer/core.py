# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Optimizer factory.

The reference example trains with ``SGD(lr=0.01, decay=1e-6)``. Keras 3
dropped the ``decay`` argument; the same per-iteration rule,

    lr_t = lr / (1 + decay * t)

is exactly ``InverseTimeDecay(lr, decay_steps=1, decay_rate=decay)``, so a
non-zero ``decay`` in the config becomes that schedule.
"""

from typing import Any, Callable

import keras

from kustom.config.schema import TrainConfig


def build_learning_rate(
    train_config: TrainConfig,
) -> float | keras.optimizers.schedules.LearningRateSchedule:
    """Constant rate when ``decay`` is zero, inverse time decay otherwise."""
    if train_config.decay == 0.0:
        return train_config.learning_rate
    return keras.optimizers.schedules.InverseTimeDecay(
        initial_learning_rate=train_config.learning_rate,
        decay_steps=1,
        decay_rate=train_config.decay,
    )


def _sgd(learning_rate: Any, train_config: TrainConfig, **kwargs: Any) -> keras.optimizers.Optimizer:
    return keras.optimizers.SGD(
        learning_rate=learning_rate, momentum=train_config.momentum, **kwargs
    )


def _adam(learning_rate: Any, train_config: TrainConfig, **kwargs: Any) -> keras.optimizers.Optimizer:
    return keras.optimizers.Adam(learning_rate=learning_rate, **kwargs)


def _rmsprop(learning_rate: Any, train_config: TrainConfig, **kwargs: Any) -> keras.optimizers.Optimizer:
    return keras.optimizers.RMSprop(
        learning_rate=learning_rate, momentum=train_config.momentum, **kwargs
    )


_OPTIMIZERS: dict[str, Callable[..., keras.optimizers.Optimizer]] = {
    "sgd": _sgd,
    "adam": _adam,
    "rmsprop": _rmsprop,
}


def create_optimizer(train_config: TrainConfig) -> keras.optimizers.Optimizer:
    """
    Build the optimizer named by ``train_config.optimizer``.

    Raises:
        ValueError: If the name is not one of sgd, adam, rmsprop.
    """
    name = train_config.optimizer.lower()
    factory = _OPTIMIZERS.get(name)
    if factory is None:
        raise ValueError(f"Unknown optimizer '{train_config.optimizer}'. Available: {sorted(_OPTIMIZERS)}")

    kwargs: dict[str, Any] = {}
    if train_config.clipnorm is not None:
        kwargs["clipnorm"] = train_config.clipnorm

    return factory(build_learning_rate(train_config), train_config, **kwargs)
