# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Read a YAML file from disk and return a validated, frozen KustomConfig.

Loading is one straight line: read text, ``yaml.safe_load``, hand the mapping
to pydantic. A failure at any point raises a ConfigError subclass and nothing
is defaulted behind the caller's back.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kustom.config.exceptions import ConfigLoadError, ConfigValidationError
from kustom.config.schema import KustomConfig


def _read_yaml_mapping(config_path: Path) -> dict[str, Any]:
    """
    Parse ``config_path`` and insist the document is a mapping.

    Raises:
        ConfigLoadError: Missing path, a directory, unreadable file, bad YAML,
            or a top-level value that is not a dict.
    """
    if not config_path.exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")
    if not config_path.is_file():
        raise ConfigLoadError(f"Config path is not a file: {config_path}")

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if not isinstance(document, dict):
        raise ConfigLoadError(
            f"Config file must contain a YAML mapping, got {type(document).__name__}"
        )
    return document


def load_config(config_path: Path) -> KustomConfig:
    """
    Load and validate a kustom config file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        A frozen KustomConfig.

    Raises:
        ConfigLoadError: I/O or YAML parse failures.
        ConfigValidationError: Schema violations.
    """
    document = _read_yaml_mapping(config_path)
    try:
        return KustomConfig.model_validate(document)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Config validation failed for {config_path}:\n{err}"
        ) from err
