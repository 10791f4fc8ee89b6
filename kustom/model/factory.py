# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Turn a ModelConfig into a built, ready-to-compile model instance.

Building eagerly against ``(None, n_features)`` means the weights exist
before compile(), so the parameter count can be logged up front and a shape
mismatch shows up here rather than on the first training batch.
"""

import logging
from typing import NamedTuple

import keras
import numpy as np

from kustom.config.schema import ModelConfig
from kustom.logging.logger import get_logger
from kustom.model.registry import get_model_class

logger: logging.Logger = get_logger(__name__)


class LayerSummary(NamedTuple):
    """One row of ``summarize_model``."""

    name: str
    layer_type: str
    parameters: int


def count_parameters(layer: keras.Layer) -> int:
    """Total number of weight elements, trainable or not."""
    return int(sum(np.prod(weight.shape) for weight in layer.weights))


def summarize_model(model: keras.Model) -> list[LayerSummary]:
    """Per-layer name, class and parameter count, in attribute order."""
    return [
        LayerSummary(
            name=layer.name,
            layer_type=type(layer).__name__,
            parameters=count_parameters(layer),
        )
        for layer in model.layers
    ]


def build_model(config: ModelConfig, n_features: int) -> keras.Model:
    """
    Instantiate the configured model class and build it for ``n_features`` inputs.

    Args:
        config: Validated model section.
        n_features: Width of each input row.

    Returns:
        A built ``keras.Model``.

    Raises:
        KeyError: If ``config.model_type`` is not registered.
        ValueError: If ``n_features`` is not positive, or the model rejects
            its constructor arguments.
    """
    if n_features < 1:
        raise ValueError(f"n_features must be >= 1, got {n_features}")

    model_cls = get_model_class(config.model_type)
    logger.info(
        "Building model",
        extra={
            "model_type": config.model_type,
            "n_features": n_features,
            "hidden_units": config.hidden_units,
            "num_classes": config.num_classes,
            "use_dropout": config.use_dropout,
            "use_batch_norm": config.use_batch_norm,
        },
    )
    model = model_cls(
        num_classes=config.num_classes,
        hidden_units=config.hidden_units,
        activation=config.activation,
        use_dropout=config.use_dropout,
        dropout_rate=config.dropout_rate,
        use_batch_norm=config.use_batch_norm,
        bn_axis=config.bn_axis,
        output_activation=config.output_activation,
        name=config.name,
    )
    model.build((None, n_features))

    logger.info("Model built", extra={"total_parameters": count_parameters(model)})
    return model
