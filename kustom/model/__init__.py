# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Subclassed Keras models, their registry, and the factory that builds them."""

from kustom.model.factory import build_model, count_parameters, summarize_model
from kustom.model.registry import get_model_class, list_model_types, register_model
from kustom.model.simple_mlp import SimpleMLP

__all__ = [
    "SimpleMLP",
    "build_model",
    "count_parameters",
    "get_model_class",
    "list_model_types",
    "register_model",
    "summarize_model",
]
