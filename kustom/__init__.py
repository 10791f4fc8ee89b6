# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
kustom: custom Keras models by subclassing.

Keras 3 reads KERAS_BACKEND once, at its first import, so the backend is
chosen here before any submodule gets a chance to import keras. An explicit
choice made by the caller's environment always wins.
"""

import os

os.environ.setdefault("KERAS_BACKEND", "torch")

__version__ = "0.1.0"
