# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the optimizer factory and the time-decay schedule."""

import keras
import pytest

from kustom.config.schema import TrainConfig
from kustom.training.optimizer.core import build_learning_rate, create_optimizer


def _as_float(value: object) -> float:
    return float(keras.ops.convert_to_numpy(value))


class TestLearningRate:
    def test_zero_decay_is_constant(self) -> None:
        assert build_learning_rate(TrainConfig(decay=0.0)) == pytest.approx(0.01)

    def test_decay_becomes_inverse_time_schedule(self) -> None:
        schedule = build_learning_rate(TrainConfig(learning_rate=0.01, decay=1e-6))
        assert isinstance(schedule, keras.optimizers.schedules.InverseTimeDecay)

    def test_schedule_follows_legacy_rule(self) -> None:
        schedule = build_learning_rate(TrainConfig(learning_rate=0.1, decay=0.01))
        assert _as_float(schedule(0)) == pytest.approx(0.1)
        assert _as_float(schedule(100)) == pytest.approx(0.1 / (1 + 0.01 * 100), rel=1e-5)


class TestCreateOptimizer:
    @pytest.mark.parametrize(
        ("name", "cls"),
        [
            ("sgd", keras.optimizers.SGD),
            ("adam", keras.optimizers.Adam),
            ("rmsprop", keras.optimizers.RMSprop),
        ],
    )
    def test_optimizer_types(self, name: str, cls: type) -> None:
        assert isinstance(create_optimizer(TrainConfig(optimizer=name)), cls)

    def test_sgd_momentum(self) -> None:
        optimizer = create_optimizer(TrainConfig(optimizer="sgd", momentum=0.9))
        assert optimizer.momentum == pytest.approx(0.9)

    def test_clipnorm_passed_through(self) -> None:
        optimizer = create_optimizer(TrainConfig(clipnorm=1.5))
        assert optimizer.clipnorm == pytest.approx(1.5)

    def test_unknown_optimizer_rejected(self) -> None:
        config = TrainConfig.model_construct(optimizer="lbfgs")
        with pytest.raises(ValueError, match="Unknown optimizer"):
            create_optimizer(config)
