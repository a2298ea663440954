"""Tests for client configuration."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from openphacts.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Config, _load_dotenv


class TestConfig:
    """Tests for Config dataclass."""

    def test_config_default_values(self) -> None:
        """Test Config default values."""
        config = Config()
        assert config.base_url == DEFAULT_BASE_URL
        assert config.app_id is None
        assert config.app_key is None
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.default_lens is None
        assert config.datasets_file is None

    def test_has_credentials_true(self) -> None:
        """Test has_credentials when both are set."""
        assert Config(app_id="id", app_key="key").has_credentials() is True

    def test_has_credentials_false_missing_key(self) -> None:
        """Test has_credentials when the key is missing."""
        assert Config(app_id="id").has_credentials() is False

    def test_has_credentials_false_missing_id(self) -> None:
        """Test has_credentials when the id is missing."""
        assert Config(app_key="key").has_credentials() is False


class TestConfigFromEnv:
    """Tests for Config.from_env."""

    def test_from_env_defaults(self, tmp_path: Path) -> None:
        """Test loading with nothing set."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env(tmp_path / "missing.env")

        assert config.base_url == DEFAULT_BASE_URL
        assert config.app_id is None
        assert config.timeout == DEFAULT_TIMEOUT

    def test_from_env_all_values(self, tmp_path: Path) -> None:
        """Test loading every setting from the environment."""
        env = {
            "OPS_BASE_URL": "https://ops.example.org/2.0/",
            "OPS_APP_ID": "id",
            "OPS_APP_KEY": "key",
            "OPS_TIMEOUT": "12.5",
            "OPS_LENS": "Default",
            "OPS_DATASETS_FILE": "/etc/ops/datasets.yaml",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env(tmp_path / "missing.env")

        assert config.base_url == "https://ops.example.org/2.0"
        assert config.app_id == "id"
        assert config.app_key == "key"
        assert config.timeout == 12.5
        assert config.default_lens == "Default"
        assert config.datasets_file == Path("/etc/ops/datasets.yaml")
        assert config.has_credentials() is True

    def test_from_env_empty_values_are_unset(self, tmp_path: Path) -> None:
        """Test that empty strings count as unset."""
        with patch.dict(os.environ, {"OPS_APP_ID": "", "OPS_LENS": ""}, clear=True):
            config = Config.from_env(tmp_path / "missing.env")
        assert config.app_id is None
        assert config.default_lens is None

    def test_from_env_invalid_timeout(self, tmp_path: Path) -> None:
        """Test that a non-numeric timeout is rejected."""
        with patch.dict(os.environ, {"OPS_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ValueError, match="OPS_TIMEOUT must be a number"):
                Config.from_env(tmp_path / "missing.env")

    def test_from_env_non_positive_timeout(self, tmp_path: Path) -> None:
        """Test that a zero timeout is rejected."""
        with patch.dict(os.environ, {"OPS_TIMEOUT": "0"}, clear=True):
            with pytest.raises(ValueError, match="must be positive"):
                Config.from_env(tmp_path / "missing.env")

    def test_from_env_reads_dotenv(self, tmp_path: Path) -> None:
        """Test that values come from the .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("OPS_APP_ID=from-file\nOPS_APP_KEY='quoted-key'\n")

        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env(env_file)

        assert config.app_id == "from-file"
        assert config.app_key == "quoted-key"


class TestLoadDotenv:
    """Tests for _load_dotenv function."""

    def test_load_dotenv_basic(self, tmp_path: Path) -> None:
        """Test loading basic .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("OPS_TEST_VAR=test_value\n")

        with patch.dict(os.environ, {}, clear=True):
            _load_dotenv(env_file)
            assert os.environ["OPS_TEST_VAR"] == "test_value"

    def test_load_dotenv_skips_comments_and_blank_lines(self, tmp_path: Path) -> None:
        """Test that comments, blank lines and malformed lines are ignored."""
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\n\nNOT_A_PAIR\nOPS_A=1\n")

        with patch.dict(os.environ, {}, clear=True):
            _load_dotenv(env_file)
            assert os.environ.get("OPS_A") == "1"
            assert "NOT_A_PAIR" not in os.environ

    def test_load_dotenv_export_prefix(self, tmp_path: Path) -> None:
        """Test that shell export prefixes are accepted."""
        env_file = tmp_path / ".env"
        env_file.write_text('export OPS_B="two"\n')

        with patch.dict(os.environ, {}, clear=True):
            _load_dotenv(env_file)
            assert os.environ.get("OPS_B") == "two"

    def test_load_dotenv_does_not_override(self, tmp_path: Path) -> None:
        """Test that existing environment variables win."""
        env_file = tmp_path / ".env"
        env_file.write_text("OPS_APP_ID=from-file\n")

        with patch.dict(os.environ, {"OPS_APP_ID": "from-env"}, clear=True):
            _load_dotenv(env_file)
            assert os.environ["OPS_APP_ID"] == "from-env"

    def test_load_dotenv_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is ignored."""
        with patch.dict(os.environ, {}, clear=True):
            _load_dotenv(tmp_path / "nope.env")
            assert "OPS_APP_ID" not in os.environ
