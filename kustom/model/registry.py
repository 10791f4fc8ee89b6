# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Model class registry.

Maps the ``model.model_type`` string from the config to a ``keras.Model``
subclass, so picking an architecture is a config change, not a code change.
The built-in classes register themselves when ``_register_builtins`` imports
their modules at the bottom of this file.
"""

import logging

import keras

from kustom.logging.logger import get_logger

logger: logging.Logger = get_logger(__name__)

_MODEL_REGISTRY: dict[str, type[keras.Model]] = {}


def register_model(name: str, cls: type[keras.Model]) -> None:
    """
    Register ``cls`` under ``name``.

    Raises:
        TypeError: If ``cls`` is not a ``keras.Model`` subclass.
        ValueError: If ``name`` is already taken.
    """
    if not (isinstance(cls, type) and issubclass(cls, keras.Model)):
        raise TypeError(f"Model type '{name}' must be a keras.Model subclass, got {cls!r}")
    if name in _MODEL_REGISTRY:
        raise ValueError(
            f"Model type '{name}' is already registered to {_MODEL_REGISTRY[name].__name__}"
        )
    _MODEL_REGISTRY[name] = cls
    logger.debug("Registered model", extra={"model_type": name, "cls": cls.__name__})


def get_model_class(name: str) -> type[keras.Model]:
    """
    Look up a registered model class.

    Raises:
        KeyError: If ``name`` is unknown; the message lists what is available.
    """
    if name not in _MODEL_REGISTRY:
        raise KeyError(f"Unknown model type '{name}'. Available: {list_model_types()}")
    return _MODEL_REGISTRY[name]


def list_model_types() -> list[str]:
    """Registered names, sorted."""
    return sorted(_MODEL_REGISTRY)


_BUILTINS_REGISTERED: bool = False


def _register_builtins() -> None:
    global _BUILTINS_REGISTERED
    if _BUILTINS_REGISTERED:
        return

    import kustom.model.simple_mlp  # noqa: F401

    _BUILTINS_REGISTERED = True


_register_builtins()
