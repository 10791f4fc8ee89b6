# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
kustom training package.

Subsystems:
  - optimizer: optimizer and learning-rate schedule factory
  - metrics: Keras callback that logs epoch metrics as JSON
  - checkpoint: atomic save/load of trained model archives
  - engine: compile, fit, verify, persist; plus experiment directories
"""
