# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Environment checks and a snapshot of the machine we are running on.

The snapshot includes the Keras version and the active backend, since a
model archive is only as portable as the backend that produced it.
"""

import platform
import sys
from typing import NamedTuple

import keras

MINIMUM_PYTHON = (3, 10)


class SystemInfo(NamedTuple):
    """What ``kustom info`` and the bootstrap record report."""

    python_version: str
    platform: str
    architecture: str
    hostname: str
    keras_version: str
    keras_backend: str


def check_minimum_python(version_info: tuple[int, ...] | None = None) -> None:
    """
    Raise RuntimeError when the interpreter is older than MINIMUM_PYTHON.

    ``version_info`` defaults to ``sys.version_info`` and exists for tests.
    """
    current = tuple(version_info if version_info is not None else sys.version_info[:2])[:2]
    if current < MINIMUM_PYTHON:
        required = ".".join(str(part) for part in MINIMUM_PYTHON)
        found = ".".join(str(part) for part in current)
        raise RuntimeError(f"kustom requires Python >= {required}, but you're running {found}.")


def get_system_info() -> SystemInfo:
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
        keras_version=keras.__version__,
        keras_backend=keras.backend.backend(),
    )
