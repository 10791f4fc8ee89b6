# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Errors raised while turning a YAML file into a KustomConfig."""


class ConfigError(Exception):
    """Base for all configuration errors."""


class ConfigLoadError(ConfigError):
    """The file is missing, unreadable, or not a YAML mapping."""


class ConfigValidationError(ConfigError):
    """
    The YAML parsed but does not match the schema: a required field is
    missing, a value has the wrong type or range, or a key is unknown.
    """
