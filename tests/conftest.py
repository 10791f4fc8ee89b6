# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for kustom tests.

The backend is pinned to torch here, before any test module imports keras.
"""

import os

os.environ.setdefault("KERAS_BACKEND", "torch")

import logging
import textwrap
from pathlib import Path

import pytest

from kustom.logging.logger import configure_logging


def _drop_package_handlers() -> None:
    package_logger = logging.getLogger("kustom")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture(autouse=True)
def _fresh_package_logging() -> None:
    """Each test starts with the package logger at INFO on stdout only."""
    _drop_package_handlers()
    configure_logging("INFO")
    yield  # type: ignore[misc]
    _drop_package_handlers()


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes schema validation."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "kustom-test"
          seed: 42
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def tiny_train_config_file(tmp_path: Path) -> Path:
    """A complete config small enough to train on CPU in a second or two."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "kustom-test"
          seed: 7
          log_level: "WARNING"

        model:
          num_classes: 4
          hidden_units: 8
          use_dropout: true
          use_batch_norm: true

        data:
          n_samples: 64
          n_features: 12

        train:
          learning_rate: 0.05
          epochs: 2
          batch_size: 16
    """)
    config_file = tmp_path / "tiny_train.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML, but the required config_version is missing."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "kustom-test"
          seed: 42
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
