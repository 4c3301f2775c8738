"""
Unit tests for configuration module.

Tests settings loading, validation, missing-variable reporting, and caching.
"""

import logging

import pytest
from pydantic import ValidationError

from fkdoctor.config import (
    ConfigurationError,
    ConfigurationMissingError,
    DatabaseSettings,
    LLMSettings,
    LoggingSettings,
    SSHSettings,
    get_settings,
    load_settings,
)


class TestDatabaseSettings:
    """Test database configuration."""

    def test_valid_database_settings(self, full_environment):
        """Valid database settings load correctly."""
        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.user == "mautic"
        assert settings.password.get_secret_value() == "db-secret"
        assert settings.name == "mautic"
        assert settings.port == 3306
        assert settings.pool_size == 5

    def test_password_is_not_exposed_in_repr(self, full_environment):
        """Password is stored as a secret."""
        settings = DatabaseSettings()

        assert "db-secret" not in repr(settings)

    def test_invalid_port(self, full_environment, monkeypatch):
        """Port must be a valid TCP port."""
        monkeypatch.setenv("DB_PORT", "70000")

        with pytest.raises(ValidationError, match="less than or equal to 65535"):
            DatabaseSettings()

    def test_custom_pool_size(self, full_environment, monkeypatch):
        """Pool size can be overridden."""
        monkeypatch.setenv("DB_POOL_SIZE", "1")

        assert DatabaseSettings().pool_size == 1


class TestSSHSettings:
    """Test SSH tunnel configuration."""

    def test_valid_ssh_settings(self, full_environment, private_key_file):
        """Valid SSH settings load correctly."""
        settings = SSHSettings()

        assert settings.host == "bastion.example.com"
        assert settings.port == 22
        assert settings.username == "deploy"
        assert settings.private_key_path == private_key_file
        assert settings.passphrase.get_secret_value() == "key-passphrase"

    def test_missing_private_key_file(self, full_environment, monkeypatch, tmp_path):
        """Private key path must point at an existing file."""
        monkeypatch.setenv("SSH_PRIVATE_KEY_PATH", str(tmp_path / "missing"))

        with pytest.raises(ValidationError, match="SSH private key not found"):
            SSHSettings()


class TestLLMSettings:
    """Test LLM configuration."""

    def test_defaults(self, full_environment):
        settings = LLMSettings()

        assert settings.api_key.get_secret_value() == "sk-test-key-1234567890-abcdefghijklmnop"
        assert settings.model == "gpt-4"
        assert settings.temperature == 0.0

    def test_custom_model(self, full_environment, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")

        assert LLMSettings().model == "gpt-4o"


class TestLoggingSettings:
    """Test logging configuration."""

    def test_default_level(self):
        assert LoggingSettings().level == "WARNING"

    def test_configure_logging(self):
        """configure() applies the configured level."""
        LoggingSettings().configure()

        assert logging.root.level == logging.WARNING

    def test_configure_logging_debug(self):
        """Debug mode overrides the configured level."""
        LoggingSettings().configure(debug=True)

        assert logging.root.level == logging.DEBUG

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INVALID")

        with pytest.raises(ValidationError):
            LoggingSettings()


class TestLoadSettings:
    """Test eager loading of the full configuration."""

    def test_load_complete_settings(self, full_environment):
        settings = load_settings(env_file=None)

        assert settings.database.name == "mautic"
        assert settings.ssh.username == "deploy"
        assert settings.llm.model == "gpt-4"

    def test_missing_variables_are_all_reported(self, full_environment, monkeypatch):
        """Every missing variable is named, using its environment name."""
        monkeypatch.delenv("DB_PASSWORD")
        monkeypatch.delenv("SSH_PASSPHRASE")
        monkeypatch.delenv("OPENAI_API_KEY")

        with pytest.raises(ConfigurationMissingError) as exc_info:
            load_settings(env_file=None)

        assert exc_info.value.missing == ["DB_PASSWORD", "SSH_PASSPHRASE", "OPENAI_API_KEY"]
        assert "DB_PASSWORD, SSH_PASSPHRASE, OPENAI_API_KEY" in str(exc_info.value)

    def test_empty_variable_counts_as_missing(self, full_environment, monkeypatch):
        monkeypatch.setenv("DB_HOST", "")

        with pytest.raises(ConfigurationMissingError, match="DB_HOST"):
            load_settings(env_file=None)

    def test_nothing_configured(self):
        with pytest.raises(ConfigurationMissingError) as exc_info:
            load_settings(env_file=None)

        assert "DB_HOST" in exc_info.value.missing
        assert "SSH_PRIVATE_KEY_PATH" in exc_info.value.missing
        assert "OPENAI_API_KEY" in exc_info.value.missing

    def test_invalid_value_raises_configuration_error(self, full_environment, monkeypatch):
        monkeypatch.setenv("SSH_PORT", "not-a-port")

        with pytest.raises(ConfigurationError, match="SSH_PORT") as exc_info:
            load_settings(env_file=None)

        assert not isinstance(exc_info.value, ConfigurationMissingError)

    def test_env_file_fills_gaps(self, full_environment, monkeypatch, tmp_path):
        """Values from the .env file are used when the environment lacks them."""
        monkeypatch.delenv("DB_NAME")
        env_file = tmp_path / ".env"
        env_file.write_text("DB_NAME=from_dotenv\n")

        settings = load_settings(env_file=env_file)

        assert settings.database.name == "from_dotenv"
        monkeypatch.delenv("DB_NAME")

    def test_settings_are_frozen(self, full_environment):
        settings = load_settings(env_file=None)

        with pytest.raises(ValidationError):
            settings.database = None


class TestGetSettings:
    """Test settings caching."""

    def test_get_settings_is_cached(self, full_environment):
        assert get_settings() is get_settings()
