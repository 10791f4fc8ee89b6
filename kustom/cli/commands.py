# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the kustom CLI.

Each handler takes the parsed argparse namespace and returns an exit code
from ``kustom.cli.exit_codes``. Output goes through the JSON logger only.
"""

import argparse
import logging
from pathlib import Path

from kustom.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from kustom.config.exceptions import ConfigError
from kustom.config.loader import load_config
from kustom.config.schema import KustomConfig
from kustom.logging.logger import configure_logging, get_logger
from kustom.runtime.bootstrap import bootstrap, set_deterministic_seed


def _apply_overrides(config: KustomConfig, args: argparse.Namespace) -> KustomConfig:
    update: dict[str, object] = {}
    if args.seed is not None:
        update["seed"] = args.seed
    if args.log_level is not None:
        update["log_level"] = args.log_level
    if not update:
        return config
    global_config = config.global_config.model_copy(update=update)
    return config.model_copy(update={"global_config": global_config})


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, KustomConfig | None, logging.Logger]:
    """
    Setup shared by every command: load the config (if given), apply the
    --seed and --log-level overrides, and run the bootstrap.

    Returns:
        (exit_code, config, logger). A non-SUCCESS code means the caller
        should return it unchanged.
    """
    if args.log_level is not None:
        configure_logging(args.log_level)
    logger = get_logger(f"kustom.cli.{command_name}")

    config = None
    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger

    if config is not None:
        config = _apply_overrides(config, args)
        try:
            bootstrap(config.global_config, project_root=Path(args.config).resolve().parent)
        except OSError as err:
            logger.error(
                "Cannot open log file",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger
        except RuntimeError as err:
            logger.error("Bootstrap failed", extra={"command": command_name, "error": str(err)})
            return RUNTIME_ERROR, None, logger
    else:
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": command_name},
        )
        if args.seed is not None:
            set_deterministic_seed(args.seed)

    return SUCCESS, config, logger


def _resolve_experiments_root(args: argparse.Namespace, config: KustomConfig) -> Path:
    """--experiments-dir if given, else <project root>/<directories.experiments>."""
    if args.experiments_dir is not None:
        return Path(args.experiments_dir)

    from kustom.utils.paths import resolve_project_root

    try:
        project_root = resolve_project_root(Path.cwd())
    except RuntimeError:
        project_root = Path.cwd()
    return project_root / config.global_config.directories.experiments


def handle_train(args: argparse.Namespace) -> int:
    """Build, compile and fit the configured model, then persist the run."""
    exit_code, config, logger = _load_and_bootstrap(args, "train")
    if exit_code != SUCCESS:
        return exit_code

    if config is None or config.model is None or config.train is None:
        logger.error(
            "Model and training config sections are required",
            extra={"command": "train"},
        )
        return CONFIG_ERROR

    try:
        logger.info("Starting training", extra={"command": "train", "dry_run": args.dry_run})

        if args.dry_run:
            logger.info(
                "Dry run, would start training",
                extra={
                    "model_type": config.model.model_type,
                    "epochs": config.train.epochs,
                    "batch_size": config.train.batch_size,
                    "optimizer": config.train.optimizer,
                },
            )
            return SUCCESS

        from kustom.utils.paths import ensure_directory
        from kustom.training.engine.core import run_training
        from kustom.training.engine.experiment import create_experiment_dir

        experiments_root = ensure_directory(_resolve_experiments_root(args, config))
        experiment_dir = create_experiment_dir(
            experiments_root, config, config.global_config.seed,
        )
        result = run_training(config, experiment_dir)

        logger.info(
            "Training complete",
            extra={
                "epochs_run": result.epochs_run,
                "final_loss": result.final_loss,
                "output_dim": result.output_dim,
                "experiment_dir": result.experiment_dir,
            },
        )
        return SUCCESS

    except Exception as err:
        logger.error("Training failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_summary(args: argparse.Namespace) -> int:
    """Build the configured model (defaults when no config) and log its layers."""
    exit_code, config, logger = _load_and_bootstrap(args, "summary")
    if exit_code != SUCCESS:
        return exit_code

    from kustom.config.schema import DataConfig, ModelConfig
    from kustom.model.factory import build_model, count_parameters, summarize_model

    model_cfg = config.model if config is not None and config.model is not None else ModelConfig()
    data_cfg = config.data if config is not None and config.data is not None else DataConfig()

    try:
        model = build_model(model_cfg, n_features=data_cfg.n_features)
    except KeyError as err:
        logger.error("Unknown model type", extra={"error": str(err)})
        return CONFIG_ERROR
    except Exception as err:
        logger.error("Model construction failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    for row in summarize_model(model):
        logger.info(
            "Layer",
            extra={"layer": row.name, "layer_type": row.layer_type, "parameters": row.parameters},
        )
    logger.info(
        "Model summary",
        extra={
            "model": model.name,
            "n_features": data_cfg.n_features,
            "num_classes": model_cfg.num_classes,
            "total_parameters": count_parameters(model),
        },
    )
    return SUCCESS


def handle_evaluate(args: argparse.Namespace) -> int:
    """Reload the model saved by a training run and evaluate it."""
    exit_code, config, logger = _load_and_bootstrap(args, "evaluate")
    if exit_code != SUCCESS:
        return exit_code

    if config is None:
        logger.error("A config file is required for evaluation", extra={"command": "evaluate"})
        return CONFIG_ERROR

    from kustom.training.engine.experiment import find_experiment_dir

    experiments_root = _resolve_experiments_root(args, config)
    experiment_dir = find_experiment_dir(experiments_root, args.run_id)
    if experiment_dir is None:
        logger.error(
            "No matching experiment found",
            extra={"experiments_root": str(experiments_root), "run_id": args.run_id},
        )
        return USER_ERROR

    artifact_dir = experiment_dir / "model"
    if args.dry_run:
        logger.info("Dry run, would evaluate", extra={"artifact_dir": str(artifact_dir)})
        return SUCCESS

    from kustom.training.engine.core import evaluate_saved_model

    try:
        scores = evaluate_saved_model(config, artifact_dir)
    except FileNotFoundError as err:
        logger.error("Model artifact missing", extra={"error": str(err)})
        return USER_ERROR
    except ValueError as err:
        logger.error("Config does not match the saved model", extra={"error": str(err)})
        return VALIDATION_ERROR
    except Exception as err:
        logger.error("Evaluation failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    logger.info("Evaluation finished", extra={"run_id": experiment_dir.name, **scores})
    return SUCCESS


def handle_info(args: argparse.Namespace) -> int:
    """Log the interpreter, platform and Keras backend."""
    if args.log_level is not None:
        configure_logging(args.log_level)
    logger = get_logger("kustom.cli.info")

    from kustom import __version__
    from kustom.runtime.environment import get_system_info

    info = get_system_info()
    logger.info(
        "System information",
        extra={
            "kustom_version": __version__,
            "python_version": info.python_version,
            "platform": info.platform,
            "architecture": info.architecture,
            "hostname": info.hostname,
            "keras_version": info.keras_version,
            "keras_backend": info.keras_backend,
            "config": args.config,
        },
    )
    return SUCCESS
