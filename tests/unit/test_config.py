"""
Runtime Configuration Unit Tests
Tests for sumtree/config/runtime.py
"""
import json

import pytest

from sumtree.config import (
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    load_config,
    set_default_config,
)
from sumtree.config.runtime import default_config_paths


class TestRuntimeConfig:
    """Tests for RuntimeConfig construction."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.proof_workers == 4
        assert config.output_format == "human"

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"proof_workers": 2})

        assert config.proof_workers == 2
        assert config.log_level == "INFO"

    def test_rejects_zero_workers(self):
        with pytest.raises(ValueError, match="proof_workers"):
            RuntimeConfig(proof_workers=0)

    def test_rejects_unknown_output_format(self):
        with pytest.raises(ValueError, match="output_format"):
            RuntimeConfig(output_format="yaml")

    def test_to_dict_round_trips_through_from_dict(self):
        config = RuntimeConfig(log_level="DEBUG", proof_workers=8, output_format="json")
        assert RuntimeConfig.from_dict(config.to_dict()) == config


class TestEnvOverrides:
    """Tests for SUMTREE_* environment variables."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SUMTREE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SUMTREE_PROOF_WORKERS", "3")

        config = RuntimeConfig.from_env()

        assert config.log_level == "DEBUG"
        assert config.proof_workers == 3

    def test_with_env_overrides_returns_copy(self, monkeypatch):
        base = RuntimeConfig(proof_workers=2)
        monkeypatch.setenv("SUMTREE_OUTPUT_FORMAT", "json")

        updated = base.with_env_overrides()

        assert updated.output_format == "json"
        assert updated.proof_workers == 2
        assert base.output_format == "human"

    def test_invalid_env_value_rejected(self, monkeypatch):
        monkeypatch.setenv("SUMTREE_PROOF_WORKERS", "0")
        with pytest.raises(ValueError):
            RuntimeConfig().with_env_overrides()

    def test_default_config_reads_env(self, monkeypatch):
        monkeypatch.setenv("SUMTREE_PROOF_WORKERS", "6")
        set_default_config(None)

        assert get_default_config().proof_workers == 6


class TestLoadConfig:
    """Tests for load_config() file discovery."""

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"log_level": "WARNING"}))

        assert load_config(path).log_level == "WARNING"

    def test_explicit_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "missing.json")

    def test_default_location_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        (tmp_path / ".sumtree.json").write_text(json.dumps({"proof_workers": 5}))

        assert load_config().proof_workers == 5

    def test_no_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))

        assert load_config() == RuntimeConfig()

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"proof_workers": 2}))
        monkeypatch.setenv("SUMTREE_PROOF_WORKERS", "7")

        assert load_config(path).proof_workers == 7

    def test_default_paths_order(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        paths = default_config_paths()

        assert [p.name for p in paths] == ["sumtree.json", ".sumtree.json", "config.json"]


class TestTemplate:
    def test_template_is_loadable(self, tmp_path):
        path = tmp_path / "sumtree.json"
        path.write_text(get_default_config_template())

        assert RuntimeConfig.from_json(path) == RuntimeConfig()
