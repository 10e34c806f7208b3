"""
Runtime Configuration Unit Tests
Tests for core/config/runtime.py
"""
import json

import pytest

from core.config.runtime import (
    DEFAULT_FIELD_MODULUS,
    LedgerConfig,
    RuntimeConfig,
    ShieldConfig,
    load_runtime_config,
)
from core.schemas.errors import ConfigurationException


class TestShieldConfig:
    """Tests for ShieldConfig validation."""

    def test_defaults(self):
        config = ShieldConfig()
        assert config.field_modulus == DEFAULT_FIELD_MODULUS
        assert config.packing_size == 128
        assert config.hash_chunk_bits == 432
        assert config.hash_chunk_bytes == 54
        assert config.digest_length_bytes == 27
        assert config.tree_depth == 33
        assert config.modulus_bits == 254

    @pytest.mark.parametrize("kwargs", [
        {"packing_size": 12},
        {"packing_size": 0},
        {"packing_size": 256},
        {"hash_chunk_bits": 431},
        {"hash_chunk_bits": 216},
        {"digest_length_bytes": 33},
        {"tree_depth": 0},
        {"field_modulus": "1"},
        {"field_modulus": "0x11"},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigurationException) as exc_info:
            ShieldConfig(**kwargs)
        assert exc_info.value.code == "INVALID_CONFIGURATION"

    def test_integer_modulus_normalized(self):
        config = ShieldConfig(field_modulus=int(DEFAULT_FIELD_MODULUS))
        assert config.field_modulus == DEFAULT_FIELD_MODULUS
        assert config == ShieldConfig()

    @pytest.mark.parametrize("name,value", [
        ("packing_size", "64"),
        ("tree_depth", 3.0),
        ("digest_length_bytes", True),
        ("field_modulus", 1.5),
    ])
    def test_wrong_types_rejected(self, name, value):
        with pytest.raises(ConfigurationException) as exc_info:
            ShieldConfig(**{name: value})
        assert exc_info.value.details == {"field": name}

    def test_frozen(self):
        config = ShieldConfig()
        with pytest.raises(AttributeError):
            config.packing_size = 64


class TestRuntimeConfig:
    """Tests for loading RuntimeConfig."""

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"shield": {"tree_depth": 3}, "log_level": "DEBUG"})
        assert config.shield.tree_depth == 3
        assert config.shield.packing_size == 128
        assert config.ledger == LedgerConfig()
        assert config.log_level == "DEBUG"

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"shield": {"chunk": 3}})

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({
            "shield": {"packing_size": 64},
            "ledger": {"endpoint": "http://ledger.local", "timeout": 5.0},
        })
        assert RuntimeConfig.from_dict(config.to_dict()) == config

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SHIELD_PACKING_SIZE", "64")
        monkeypatch.setenv("SHIELD_LEDGER_ENDPOINT", "http://ledger.local")
        monkeypatch.setenv("SHIELD_LOG_LEVEL", "WARNING")

        config = RuntimeConfig(shield=ShieldConfig(tree_depth=5)).with_env_overrides()

        assert config.shield.packing_size == 64
        assert config.shield.tree_depth == 5
        assert config.ledger.endpoint == "http://ledger.local"
        assert config.log_level == "WARNING"

    def test_env_override_not_an_integer(self, monkeypatch):
        monkeypatch.setenv("SHIELD_TREE_DEPTH", "deep")
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_env()

    def test_env_override_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("SHIELD_LEDGER_TIMEOUT", "soon")
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_env()

    def test_env_override_still_validated(self, monkeypatch):
        monkeypatch.setenv("SHIELD_PACKING_SIZE", "7")
        with pytest.raises(ConfigurationException):
            RuntimeConfig().with_env_overrides()

    def test_no_overrides_returns_same_config(self):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config


class TestLoadRuntimeConfig:

    def test_explicit_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"shield": {"tree_depth": 10}}))
        monkeypatch.setenv("SHIELD_LEDGER_TIMEOUT", "2.5")

        config = load_runtime_config(path)

        assert config.shield.tree_depth == 10
        assert config.ledger.timeout == 2.5

    def test_numeric_modulus_in_file(self, tmp_path):
        path = tmp_path / "shield.json"
        path.write_text('{"shield": {"field_modulus": ' + DEFAULT_FIELD_MODULUS + "}}")

        config = load_runtime_config(path)

        assert config.shield.field_modulus == DEFAULT_FIELD_MODULUS

    def test_string_packing_size_in_file(self, tmp_path):
        path = tmp_path / "shield.json"
        path.write_text(json.dumps({"shield": {"packing_size": "64"}}))

        with pytest.raises(ConfigurationException) as exc_info:
            load_runtime_config(path)
        assert "packing_size must be an integer" in exc_info.value.message

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_runtime_config(tmp_path / "absent.json")

    def test_searches_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "shield.json").write_text(json.dumps({"log_level": "ERROR"}))
        monkeypatch.chdir(tmp_path)

        assert load_runtime_config().log_level == "ERROR"

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert load_runtime_config() == RuntimeConfig()
