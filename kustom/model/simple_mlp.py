# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
A multi-layer perceptron written as a ``keras.Model`` subclass.

The subclassing recipe has two halves:
  - ``__init__`` creates the sub-layers and stores them as attributes, which
    is how Keras discovers and tracks their weights.
  - ``call`` is the forward pass. It composes those sub-layers and is reused
    unchanged by fit(), evaluate() and predict().

Layout:
  Dense(hidden_units, activation)
  -> Dropout(dropout_rate)            only if use_dropout
  -> BatchNormalization(axis=bn_axis) only if use_batch_norm
  -> Dense(num_classes, output_activation)
"""

from typing import Any

import keras
from keras import layers

from kustom.model.registry import register_model


@keras.saving.register_keras_serializable(package="kustom")
class SimpleMLP(keras.Model):
    """
    Two dense layers with optional dropout and batch normalization between them.

    Args:
        num_classes: Width of the output layer.
        hidden_units: Width of the hidden layer.
        activation: Hidden layer activation.
        use_dropout: Whether to insert dropout after the hidden layer.
        dropout_rate: Fraction of hidden units dropped during training.
        use_batch_norm: Whether to insert batch normalization after dropout.
        bn_axis: Axis normalized by batch normalization.
        output_activation: Output layer activation.
        name: Keras model name.

    Raises:
        ValueError: On a non-positive width or a dropout rate outside [0, 1).
    """

    def __init__(
        self,
        num_classes: int,
        hidden_units: int = 32,
        activation: str = "relu",
        use_dropout: bool = False,
        dropout_rate: float = 0.5,
        use_batch_norm: bool = False,
        bn_axis: int = -1,
        output_activation: str = "softmax",
        name: str | None = None,
        **kwargs: Any,
    ) -> None:
        if num_classes < 1:
            raise ValueError(f"num_classes must be >= 1, got {num_classes}")
        if hidden_units < 1:
            raise ValueError(f"hidden_units must be >= 1, got {hidden_units}")
        if not 0.0 <= dropout_rate < 1.0:
            raise ValueError(f"dropout_rate must be in [0, 1), got {dropout_rate}")

        super().__init__(name=name, **kwargs)
        self.num_classes = num_classes
        self.hidden_units = hidden_units
        self.activation = activation
        self.use_dropout = use_dropout
        self.dropout_rate = dropout_rate
        self.use_batch_norm = use_batch_norm
        self.bn_axis = bn_axis
        self.output_activation = output_activation

        self.dense1 = layers.Dense(hidden_units, activation=activation, name="dense1")
        self.dropout = layers.Dropout(dropout_rate, name="dropout") if use_dropout else None
        self.batch_norm = (
            layers.BatchNormalization(axis=bn_axis, name="batch_norm") if use_batch_norm else None
        )
        self.dense2 = layers.Dense(num_classes, activation=output_activation, name="dense2")

    def build(self, input_shape: tuple[int | None, ...]) -> None:
        # Creates every sub-layer weight, including when an archive is reloaded.
        self.dense1.build(input_shape)
        hidden_shape = (*input_shape[:-1], self.hidden_units)
        if self.dropout is not None:
            self.dropout.build(hidden_shape)
        if self.batch_norm is not None:
            self.batch_norm.build(hidden_shape)
        self.dense2.build(hidden_shape)
        self.built = True

    def call(self, inputs: Any, training: bool | None = None) -> Any:
        x = self.dense1(inputs)
        if self.dropout is not None:
            x = self.dropout(x, training=training)
        if self.batch_norm is not None:
            x = self.batch_norm(x, training=training)
        return self.dense2(x)

    def get_config(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "trainable": self.trainable,
            "num_classes": self.num_classes,
            "hidden_units": self.hidden_units,
            "activation": self.activation,
            "use_dropout": self.use_dropout,
            "dropout_rate": self.dropout_rate,
            "use_batch_norm": self.use_batch_norm,
            "bn_axis": self.bn_axis,
            "output_activation": self.output_activation,
        }

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "SimpleMLP":
        return cls(**config)


register_model("simple_mlp", SimpleMLP)
