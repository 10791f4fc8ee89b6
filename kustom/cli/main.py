# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for kustom.

Every operation is a subcommand of ``kustom``. The global options (--config,
--log-level, --dry-run, --seed) come from a parent parser shared by all of
them.

Usage:
    kustom train --config configs/simple_mlp.yaml
    kustom summary --config configs/simple_mlp.yaml
    kustom evaluate --config configs/simple_mlp.yaml --run-id 20261018_101500_42
    kustom info
"""

import argparse
import sys

from kustom.cli.commands import handle_evaluate, handle_info, handle_summary, handle_train
from kustom.cli.exit_codes import USER_ERROR
from kustom.logging.logger import LOG_LEVELS


def _build_global_parser() -> argparse.ArgumentParser:
    """Options inherited by every subcommand (add_help=False avoids a clash)."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=list(LOG_LEVELS),
        help="Override the configured logging level.",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Log what would happen without training or writing anything.",
    )
    parent.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the random seed (takes precedence over config).",
    )
    return parent


def _add_experiments_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--experiments-dir",
        type=str,
        default=None,
        dest="experiments_dir",
        help="Root directory for run outputs (default: <project>/experiments).",
    )


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    commands = [
        ("train", "Build, compile and fit the configured model.", handle_train),
        ("summary", "Build the configured model and log its layers.", handle_summary),
        ("evaluate", "Evaluate the saved model of a training run.", handle_evaluate),
        ("info", "Display environment and backend info.", handle_info),
    ]
    for name, help_text, handler in commands:
        parser = subparsers.add_parser(name, parents=[parent], help=help_text)
        parser.set_defaults(func=handler, experiments_dir=None, run_id=None)

    _add_experiments_dir(subparsers.choices["train"])

    evaluate_parser = subparsers.choices["evaluate"]
    _add_experiments_dir(evaluate_parser)
    evaluate_parser.add_argument(
        "--run-id",
        type=str,
        default=None,
        dest="run_id",
        help="Run to evaluate (default: the most recent run).",
    )


def build_parser() -> argparse.ArgumentParser:
    parent = _build_global_parser()
    root_parser = argparse.ArgumentParser(
        prog="kustom",
        description="kustom: custom Keras models by subclassing.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)
    return root_parser


def main(argv: list[str] | None = None) -> None:
    """
    Parse ``argv``, dispatch to the subcommand handler, and exit with its code.
    With no subcommand, print help and exit with USER_ERROR.
    """
    root_parser = build_parser()
    args = root_parser.parse_args(argv)

    if getattr(args, "func", None) is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
