# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for schema defaults and per-field validation."""

import pytest
from pydantic import ValidationError

from kustom.config.schema import (
    DataConfig,
    GlobalConfig,
    KustomConfig,
    ModelConfig,
    TrainConfig,
)


class TestDefaults:
    def test_model_defaults_match_reference_example(self) -> None:
        config = ModelConfig()
        assert config.model_type == "simple_mlp"
        assert config.num_classes == 10
        assert config.hidden_units == 32
        assert config.activation == "relu"
        assert config.dropout_rate == 0.5
        assert config.bn_axis == -1
        assert config.output_activation == "softmax"
        assert config.use_dropout is False
        assert config.use_batch_norm is False

    def test_data_defaults(self) -> None:
        config = DataConfig()
        assert config.n_samples == 1000
        assert config.n_features == 100

    def test_train_defaults(self) -> None:
        config = TrainConfig()
        assert config.loss == "categorical_crossentropy"
        assert config.optimizer == "sgd"
        assert config.learning_rate == pytest.approx(0.01)
        assert config.decay == pytest.approx(1e-6)
        assert config.metrics == ["accuracy"]
        assert config.epochs == 10
        assert config.batch_size == 32


class TestValidation:
    def test_optimizer_is_normalized(self) -> None:
        assert TrainConfig(optimizer="Adam").optimizer == "adam"

    def test_unknown_optimizer_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TrainConfig(optimizer="lbfgs")

    @pytest.mark.parametrize("split", [-0.1, 1.0])
    def test_validation_split_range(self, split: float) -> None:
        with pytest.raises(ValidationError):
            TrainConfig(validation_split=split)

    def test_dropout_rate_must_be_below_one(self) -> None:
        with pytest.raises(ValidationError):
            ModelConfig(dropout_rate=1.0)

    def test_num_classes_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ModelConfig(num_classes=0)

    def test_log_level_is_normalized(self) -> None:
        config = GlobalConfig(config_version="1", project_name="p", log_level="debug")
        assert config.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1", project_name="p", log_level="LOUD")

    def test_negative_seed_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1", project_name="p", seed=-1)


class TestTopLevel:
    def test_global_alias(self) -> None:
        config = KustomConfig.model_validate(
            {"global": {"config_version": "1", "project_name": "p"}}
        )
        assert config.global_config.project_name == "p"

    def test_dump_uses_alias(self) -> None:
        config = KustomConfig.model_validate(
            {"global": {"config_version": "1", "project_name": "p"}, "model": {}}
        )
        dumped = config.model_dump(by_alias=True)
        assert "global" in dumped
        assert dumped["model"]["hidden_units"] == 32
