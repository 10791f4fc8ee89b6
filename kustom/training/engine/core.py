# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Training engine for kustom.

The forward pass lives in the model's ``call``; gradients, batching and
optimizer updates belong to Keras's fit(). What this module adds is the
sequence around them:

  1. Generate the dataset
  2. Build the model through the registry
  3. compile(loss, optimizer, metrics)
  4. fit(x, y, epochs, batch_size) with the metrics callback
  5. Check the output width equals the declared class count
  6. Write history.json and the model artifact
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import keras
import numpy as np

from kustom.config.schema import DataConfig, KustomConfig, TrainConfig
from kustom.data.synthetic import make_classification_data
from kustom.logging.logger import get_logger
from kustom.model.factory import build_model, count_parameters
from kustom.training.checkpoint.core import (
    ArtifactMetadata,
    load_model_artifact,
    save_model_artifact,
)
from kustom.training.metrics.core import MetricsLogger
from kustom.training.optimizer.core import create_optimizer
from kustom.utils.filesystem import atomic_write

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class TrainingResult:
    """Outcome of ``run_training``."""

    epochs_run: int
    final_loss: float
    parameters: int
    output_dim: int
    experiment_dir: str
    model_path: str
    final_metrics: dict[str, float] = field(default_factory=dict)


def compile_model(model: keras.Model, train_config: TrainConfig) -> keras.Model:
    """Attach loss, optimizer and metrics to ``model``. Returns the same model."""
    model.compile(
        loss=train_config.loss,
        optimizer=create_optimizer(train_config),
        metrics=list(train_config.metrics),
    )
    logger.info(
        "Model compiled",
        extra={
            "loss": train_config.loss,
            "optimizer": train_config.optimizer,
            "learning_rate": train_config.learning_rate,
            "decay": train_config.decay,
            "metrics": list(train_config.metrics),
        },
    )
    return model


def fit_model(
    model: keras.Model,
    x: np.ndarray,
    y: np.ndarray,
    train_config: TrainConfig,
    callbacks: Iterable[keras.callbacks.Callback] = (),
) -> keras.callbacks.History:
    """Run Keras's fit() loop with the configured schedule."""
    return model.fit(
        x,
        y,
        epochs=train_config.epochs,
        batch_size=train_config.batch_size,
        validation_split=train_config.validation_split,
        shuffle=train_config.shuffle,
        callbacks=list(callbacks),
        verbose=0,
    )


def check_output_dim(model: keras.Model, sample: np.ndarray, num_classes: int) -> int:
    """
    Run ``sample`` through the model and confirm the last axis is
    ``num_classes`` wide.

    Raises:
        RuntimeError: On a width mismatch.
    """
    output = model.predict(sample, verbose=0)
    output_dim = int(output.shape[-1])
    if output_dim != num_classes:
        raise RuntimeError(
            f"Model output has {output_dim} units but {num_classes} classes were declared"
        )
    return output_dim


def _history_to_floats(history: keras.callbacks.History) -> dict[str, list[float]]:
    return {key: [float(v) for v in values] for key, values in history.history.items()}


def run_training(config: KustomConfig, experiment_dir: Path) -> TrainingResult:
    """
    Train the configured model on synthetic data and persist the run.

    Args:
        config: Config with ``model`` and ``train`` sections. ``data`` falls
            back to its defaults when absent.
        experiment_dir: Existing directory that receives the run outputs.

    Raises:
        RuntimeError: If a required section is missing, or the trained model's
            output width does not match ``model.num_classes``.
    """
    model_cfg = config.model
    train_cfg = config.train
    if model_cfg is None:
        raise RuntimeError("Model config is required for training")
    if train_cfg is None:
        raise RuntimeError("Training config is required")
    data_cfg = config.data or DataConfig()
    seed = config.global_config.seed

    dataset = make_classification_data(
        n_samples=data_cfg.n_samples,
        n_features=data_cfg.n_features,
        num_classes=model_cfg.num_classes,
        seed=seed,
    )
    logger.info(
        "Dataset ready",
        extra={"n_samples": dataset.n_samples, "n_features": dataset.n_features},
    )

    model = build_model(model_cfg, n_features=dataset.n_features)
    compile_model(model, train_cfg)

    metrics_logger = MetricsLogger(log_interval=train_cfg.log_interval)
    history = fit_model(model, dataset.x, dataset.y, train_cfg, callbacks=[metrics_logger])

    output_dim = check_output_dim(model, dataset.x[:1], model_cfg.num_classes)

    history_values = _history_to_floats(history)
    atomic_write(
        experiment_dir / "history.json",
        json.dumps(history_values, indent=2),
    )

    epochs_run = len(history_values.get("loss", []))
    final_metrics = {key: values[-1] for key, values in history_values.items() if values}
    final_loss = final_metrics.get("loss", float("nan"))
    parameters = count_parameters(model)

    model_path = ""
    if train_cfg.save_model:
        metadata = ArtifactMetadata(
            seed=seed,
            epochs_run=epochs_run,
            final_loss=final_loss,
            n_features=dataset.n_features,
            num_classes=model_cfg.num_classes,
            keras_backend=keras.backend.backend(),
            config_snapshot=config.model_dump(by_alias=True),
        )
        model_path = str(save_model_artifact(model, metadata, experiment_dir / "model"))

    logger.info(
        "Training complete",
        extra={
            "epochs_run": epochs_run,
            "final_loss": final_loss,
            "parameters": parameters,
            "output_dim": output_dim,
        },
    )
    return TrainingResult(
        epochs_run=epochs_run,
        final_loss=final_loss,
        parameters=parameters,
        output_dim=output_dim,
        experiment_dir=str(experiment_dir),
        model_path=model_path,
        final_metrics=final_metrics,
    )


def evaluate_saved_model(config: KustomConfig, artifact_dir: Path) -> dict[str, float]:
    """
    Reload an artifact and evaluate it on the dataset ``config`` describes.

    The dataset is regenerated from the config seed, so evaluating with the
    training config reproduces the training data exactly.

    Raises:
        FileNotFoundError, RuntimeError: From ``load_model_artifact``.
        ValueError: If the configured feature count differs from the one the
            model was trained with.
    """
    model, metadata = load_model_artifact(artifact_dir)
    data_cfg = config.data or DataConfig()
    if data_cfg.n_features != metadata.n_features:
        raise ValueError(
            f"Model was trained on {metadata.n_features} features, "
            f"config asks for {data_cfg.n_features}"
        )
    batch_size = config.train.batch_size if config.train is not None else TrainConfig().batch_size

    dataset = make_classification_data(
        n_samples=data_cfg.n_samples,
        n_features=data_cfg.n_features,
        num_classes=metadata.num_classes,
        seed=config.global_config.seed,
    )
    results = model.evaluate(
        dataset.x,
        dataset.y,
        batch_size=batch_size,
        verbose=0,
        return_dict=True,
    )
    scores = {key: float(value) for key, value in results.items()}
    logger.info("Evaluation complete", extra={"path": str(artifact_dir), **scores})
    return scores
