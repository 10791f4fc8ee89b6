# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Configuration schemas for kustom.

One frozen pydantic model per YAML section. All of them share the same
ConfigDict:
  - frozen=True: a loaded config cannot be mutated
  - extra="forbid": a misspelled key fails loudly instead of being ignored
  - validate_default=True: defaults go through the same checks as user values

The defaults reproduce the reference example: a 32-unit ReLU hidden layer,
a 10-way softmax head, SGD at lr=0.01 with 1e-6 time decay, categorical
cross-entropy, accuracy, 10 epochs of batch 32 over 1000x100 uniform inputs.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kustom.logging.logger import LOG_LEVELS

SUPPORTED_OPTIMIZERS = ("sgd", "adam", "rmsprop")


class DirectoryConfig(BaseModel):
    """Output locations, relative to the project root."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    experiments: str = Field(default="experiments", description="Training run outputs")
    logs: str = Field(default="logs", description="Log files")


class GlobalConfig(BaseModel):
    """Settings shared by every command: identity, seed, logging."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(description="Schema version, e.g. '1.0.0'")
    project_name: str = Field(description="Human-readable name for this project")
    seed: int = Field(
        default=42,
        ge=0,
        description="Seed for python, numpy, torch and keras RNGs",
    )
    log_level: str = Field(default="INFO", description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL")
    log_file: Optional[str] = Field(
        default=None,
        description="Optional file that receives a copy of the JSON log lines",
    )
    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got '{value}'")
        return upper


class ModelConfig(BaseModel):
    """
    Architecture of the subclassed model.

    ``model_type`` is resolved through the model registry; the remaining
    fields are the constructor arguments of SimpleMLP.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        protected_namespaces=(),
    )

    model_type: str = Field(default="simple_mlp", description="Registered model class name")
    num_classes: int = Field(default=10, ge=1, description="Width of the output layer")
    hidden_units: int = Field(default=32, ge=1, description="Width of the hidden dense layer")
    activation: str = Field(default="relu", description="Hidden layer activation")
    use_dropout: bool = Field(default=False, description="Insert a dropout layer after the hidden layer")
    dropout_rate: float = Field(default=0.5, ge=0.0, lt=1.0, description="Fraction of units dropped")
    use_batch_norm: bool = Field(default=False, description="Insert batch normalization after dropout")
    bn_axis: int = Field(default=-1, description="Feature axis normalized by batch norm")
    output_activation: str = Field(default="softmax", description="Output layer activation")
    name: Optional[str] = Field(default=None, description="Keras model name")


class DataConfig(BaseModel):
    """Shape of the synthetic training matrix."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    n_samples: int = Field(default=1000, ge=1, description="Rows of the input matrix")
    n_features: int = Field(default=100, ge=1, description="Columns of the input matrix")


class TrainConfig(BaseModel):
    """Arguments of compile() and fit()."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    loss: str = Field(default="categorical_crossentropy", description="Keras loss identifier")
    optimizer: str = Field(default="sgd", description="One of sgd, adam, rmsprop")
    learning_rate: float = Field(default=0.01, gt=0.0, description="Initial learning rate")
    decay: float = Field(
        default=1e-6,
        ge=0.0,
        description="Per-iteration inverse time decay: lr / (1 + decay * iteration)",
    )
    momentum: float = Field(default=0.0, ge=0.0, lt=1.0, description="Momentum for sgd and rmsprop")
    clipnorm: Optional[float] = Field(default=None, gt=0.0, description="Gradient norm clip")
    metrics: list[str] = Field(
        default_factory=lambda: ["accuracy"],
        description="Metric identifiers passed to compile()",
    )
    epochs: int = Field(default=10, ge=1, description="Passes over the training data")
    batch_size: int = Field(default=32, ge=1, description="Samples per gradient update")
    validation_split: float = Field(
        default=0.0,
        ge=0.0,
        lt=1.0,
        description="Trailing fraction of the data held out for validation",
    )
    shuffle: bool = Field(default=True, description="Shuffle samples before each epoch")
    log_interval: int = Field(default=1, ge=1, description="Log metrics every N epochs")
    save_model: bool = Field(default=True, description="Write the trained model archive")

    @field_validator("optimizer")
    @classmethod
    def _supported_optimizer(cls, value: str) -> str:
        lowered = value.lower()
        if lowered not in SUPPORTED_OPTIMIZERS:
            raise ValueError(
                f"optimizer must be one of {SUPPORTED_OPTIMIZERS}, got '{value}'"
            )
        return lowered


class KustomConfig(BaseModel):
    """
    The whole config file. ``global`` is required; every other section is
    optional so a command only needs the sections it reads.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        populate_by_name=True,
    )

    global_config: GlobalConfig = Field(alias="global")
    model: Optional[ModelConfig] = None
    data: Optional[DataConfig] = None
    train: Optional[TrainConfig] = None
