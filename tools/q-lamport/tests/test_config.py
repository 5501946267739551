"""Tests for q-lamport configuration module."""

import json

import pytest
import yaml

from q_lamport.config import (
    DEFAULT_CONFIG,
    HARDENED_CONFIG,
    LEGACY_CONFIG,
    LamportConfig,
    generate_default_config,
    load_config,
    save_config,
)
from q_lamport.hashing import HashAlgorithm
from q_lamport.signer import IndexingMode


class TestLamportConfig:
    """Tests for LamportConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        config = LamportConfig()
        assert config.hash_algorithm == "sha256"
        assert config.indexing == "global"
        assert config.single_use is False
        assert config.log_level == "WARNING"

    def test_normalizes_names(self):
        """Aliases are stored in canonical form."""
        config = LamportConfig(hash_algorithm="SHA3_256", indexing="per-byte", log_level="debug")
        assert config.hash_algorithm == "sha3-256"
        assert config.indexing == "legacy"
        assert config.log_level == "DEBUG"

    def test_invalid_hash(self):
        """Unknown hash names are rejected."""
        with pytest.raises(ValueError):
            LamportConfig(hash_algorithm="md5")

    def test_invalid_indexing(self):
        """Unknown indexing modes are rejected."""
        with pytest.raises(ValueError):
            LamportConfig(indexing="random")

    def test_invalid_log_level(self):
        """Unknown log levels are rejected."""
        with pytest.raises(ValueError):
            LamportConfig(log_level="loud")

    def test_converters(self):
        """Config values convert to enums."""
        config = LamportConfig(hash_algorithm="sha3-256", indexing="legacy")
        assert config.hash_function() is HashAlgorithm.SHA3_256
        assert config.indexing_mode() is IndexingMode.LEGACY


class TestPresets:
    """Tests for preset configurations."""

    def test_default(self):
        assert DEFAULT_CONFIG == LamportConfig()

    def test_legacy(self):
        assert LEGACY_CONFIG.indexing_mode() is IndexingMode.LEGACY

    def test_hardened(self):
        assert HARDENED_CONFIG.single_use is True
        assert HARDENED_CONFIG.hash_function() is HashAlgorithm.SHA3_256
        assert HARDENED_CONFIG.indexing_mode() is IndexingMode.GLOBAL


class TestLoadSave:
    """Tests for reading and writing config files."""

    def test_yaml_round_trip(self, temp_dir):
        """Save and load YAML."""
        path = temp_dir / "lamport.yaml"
        save_config(HARDENED_CONFIG, path)
        assert load_config(path) == HARDENED_CONFIG

    def test_json_round_trip(self, temp_dir):
        """Save and load JSON."""
        path = temp_dir / "lamport.json"
        save_config(LEGACY_CONFIG, path)
        assert json.loads(path.read_text())["indexing"] == "legacy"
        assert load_config(path) == LEGACY_CONFIG

    def test_partial_yaml(self, temp_dir):
        """Missing keys take defaults."""
        path = temp_dir / "lamport.yml"
        path.write_text("single_use: true\n")
        config = load_config(path)
        assert config.single_use is True
        assert config.hash_algorithm == "sha256"

    def test_empty_yaml(self, temp_dir):
        """An empty file gives the defaults."""
        path = temp_dir / "empty.yaml"
        path.write_text("")
        assert load_config(path) == LamportConfig()

    def test_malformed_yaml(self, temp_dir):
        """YAML syntax errors become ValueError."""
        path = temp_dir / "bad.yaml"
        path.write_text("hash_algorithm: [sha256\n")
        with pytest.raises(ValueError, match="Malformed YAML"):
            load_config(path)

    def test_malformed_json(self, temp_dir):
        """JSON syntax errors become ValueError."""
        path = temp_dir / "bad.json"
        path.write_text("{\"single_use\": ")
        with pytest.raises(ValueError):
            load_config(path)

    @pytest.mark.parametrize("content", ["- sha256\n", "sha256\n", "42\n"])
    def test_not_a_mapping(self, temp_dir, content):
        """Top-level lists and scalars are rejected."""
        path = temp_dir / "lamport.yaml"
        path.write_text(content)
        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(path)

    def test_suffix_case_insensitive(self, temp_dir):
        """.YAML is read as YAML."""
        path = temp_dir / "LAMPORT.YAML"
        path.write_text("indexing: legacy\n")
        assert load_config(path) == LEGACY_CONFIG

    def test_unsupported_suffix(self, temp_dir):
        """Only YAML and JSON are supported."""
        path = temp_dir / "lamport.toml"
        path.write_text("")
        with pytest.raises(ValueError, match="Unsupported config format"):
            load_config(path)
        with pytest.raises(ValueError):
            save_config(LamportConfig(), path)


class TestGenerateDefault:
    """Tests for generate_default_config."""

    def test_yaml(self):
        data = yaml.safe_load(generate_default_config("yaml"))
        assert data == LamportConfig().model_dump()

    def test_json(self):
        data = json.loads(generate_default_config("json"))
        assert data["indexing"] == "global"

    def test_invalid_format(self):
        with pytest.raises(ValueError):
            generate_default_config("ini")
