# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the config loader.

Covers: valid files load and are frozen, schema violations raise
ConfigValidationError, and I/O or YAML problems raise ConfigLoadError.
"""

import textwrap
from pathlib import Path

import pytest

from kustom.config.exceptions import ConfigError, ConfigLoadError, ConfigValidationError
from kustom.config.loader import load_config


class TestLoadValidConfig:
    def test_loads_minimal_valid_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.global_config.project_name == "kustom-test"
        assert config.global_config.seed == 42
        assert config.global_config.log_level == "DEBUG"

    def test_optional_sections_default_to_none(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.model is None
        assert config.data is None
        assert config.train is None

    def test_default_directories(self, tmp_config_file: Path) -> None:
        dirs = load_config(tmp_config_file).global_config.directories
        assert dirs.experiments == "experiments"
        assert dirs.logs == "logs"

    def test_loads_all_sections(self, tiny_train_config_file: Path) -> None:
        config = load_config(tiny_train_config_file)
        assert config.model is not None and config.model.num_classes == 4
        assert config.data is not None and config.data.n_features == 12
        assert config.train is not None and config.train.epochs == 2

    def test_shipped_config_loads(self) -> None:
        shipped = Path(__file__).resolve().parents[2] / "configs" / "simple_mlp.yaml"
        config = load_config(shipped)
        assert config.model is not None
        assert config.model.hidden_units == 32
        assert config.train is not None
        assert config.train.decay == pytest.approx(1e-6)


class TestLoadInvalidConfig:
    def test_missing_required_field(self, invalid_config_file: Path) -> None:
        with pytest.raises(ConfigValidationError):
            load_config(invalid_config_file)

    def test_unknown_field(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
              project_name: "test"
            model:
              hidden_unitz: 16
        """)
        config_file = tmp_path / "unknown.yaml"
        config_file.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_wrong_type(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
              project_name: "test"
              seed: "not_a_number"
        """)
        config_file = tmp_path / "wrong_type.yaml"
        config_file.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_broken_yaml(self, broken_yaml_file: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(broken_yaml_file)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(config_file)

    def test_nonexistent_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path / "missing.yaml")

    def test_directory_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path)

    def test_errors_share_base_class(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")


class TestConfigImmutability:
    def test_cannot_mutate_global(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        with pytest.raises(Exception):
            config.global_config.seed = 999  # type: ignore[misc]

    def test_cannot_mutate_train(self, tiny_train_config_file: Path) -> None:
        config = load_config(tiny_train_config_file)
        assert config.train is not None
        with pytest.raises(Exception):
            config.train.epochs = 100  # type: ignore[misc]
