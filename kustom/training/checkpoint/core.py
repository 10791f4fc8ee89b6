# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Atomic save/load of a trained model.

An artifact is a directory holding:
  - model.keras     Keras archive: architecture (via get_config), weights,
                    and compile state
  - metadata.json   seed, epochs run, final loss, shapes, backend, config

Both files are written into a temp directory next to the target, which is
then renamed into place, so a crash never leaves a half-written artifact.
"""

import json
import logging
import shutil
import tempfile
from dataclasses import asdict, dataclass, field
from pathlib import Path

import keras

import kustom.model  # noqa: F401  registers the serializable model classes
from kustom.logging.logger import get_logger

logger: logging.Logger = get_logger(__name__)

MODEL_FILENAME = "model.keras"
METADATA_FILENAME = "metadata.json"


@dataclass(frozen=True)
class ArtifactMetadata:
    """What was trained, how, and on which backend."""

    seed: int
    epochs_run: int
    final_loss: float
    n_features: int
    num_classes: int
    keras_backend: str
    config_snapshot: dict[str, object] = field(default_factory=dict)


def save_model_artifact(
    model: keras.Model,
    metadata: ArtifactMetadata,
    artifact_dir: Path,
) -> Path:
    """
    Write ``model`` and ``metadata`` to ``artifact_dir``, replacing any
    previous artifact there.

    Returns:
        ``artifact_dir``.
    """
    parent = artifact_dir.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_dir = Path(tempfile.mkdtemp(dir=parent, prefix=".artifact_tmp_"))
    try:
        model.save(tmp_dir / MODEL_FILENAME)
        (tmp_dir / METADATA_FILENAME).write_text(
            json.dumps(asdict(metadata), indent=2, default=str),
            encoding="utf-8",
        )

        if artifact_dir.exists():
            shutil.rmtree(artifact_dir)
        tmp_dir.rename(artifact_dir)
    except Exception:
        if tmp_dir.exists():
            shutil.rmtree(tmp_dir)
        raise

    logger.info(
        "Model artifact saved",
        extra={"path": str(artifact_dir), "epochs_run": metadata.epochs_run},
    )
    return artifact_dir


def load_model_artifact(artifact_dir: Path) -> tuple[keras.Model, ArtifactMetadata]:
    """
    Reload a model written by ``save_model_artifact``.

    Raises:
        FileNotFoundError: If ``artifact_dir`` does not exist.
        RuntimeError: If either file is missing from it.
    """
    if not artifact_dir.is_dir():
        raise FileNotFoundError(f"Artifact directory not found: {artifact_dir}")

    model_path = artifact_dir / MODEL_FILENAME
    if not model_path.is_file():
        raise RuntimeError(f"{MODEL_FILENAME} not found in {artifact_dir}")
    meta_path = artifact_dir / METADATA_FILENAME
    if not meta_path.is_file():
        raise RuntimeError(f"{METADATA_FILENAME} not found in {artifact_dir}")

    model = keras.saving.load_model(model_path)
    metadata = ArtifactMetadata(**json.loads(meta_path.read_text(encoding="utf-8")))

    logger.info(
        "Model artifact loaded",
        extra={"path": str(artifact_dir), "keras_backend": metadata.keras_backend},
    )
    return model, metadata
