"""
Application Configuration

Pydantic-based settings management using environment variables.
Every section is validated eagerly when the process starts so that a missing
credential is reported before any network activity.

Usage:
    from fkdoctor.config import load_settings

    settings = load_settings()
    print(settings.database.host)
    print(settings.ssh.private_key_path)
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

QUIET_LOGGERS = ("sshtunnel", "paramiko")


class ConfigurationError(Exception):
    """Configuration could not be loaded or is invalid."""

    pass


class ConfigurationMissingError(ConfigurationError):
    """One or more required environment variables are not set."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "The following environment variables are not set: " + ", ".join(missing)
        )


class DatabaseSettings(BaseSettings):
    """Target MySQL database reached through the SSH tunnel."""

    host: str = Field(..., description="Database host as seen from the SSH server")
    user: str = Field(..., description="Database user")
    password: SecretStr = Field(..., description="Database password")
    name: str = Field(..., description="Schema (database) name to inspect")
    port: int = Field(..., gt=0, le=65535, description="Database port")
    pool_size: int = Field(
        default=5,
        gt=0,
        le=32,
        description="Connection pool size (bounds concurrent inspection queries)",
    )
    connection_timeout: int = Field(
        default=30,
        gt=0,
        description="Connection timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_ignore_empty=True,
        extra="ignore",
    )


class SSHSettings(BaseSettings):
    """SSH server used to forward the database port."""

    host: str = Field(..., description="SSH server host")
    port: int = Field(..., gt=0, le=65535, description="SSH server port")
    username: str = Field(..., description="SSH username")
    private_key_path: Path = Field(..., description="Path to the private key file")
    passphrase: SecretStr = Field(..., description="Passphrase for the private key")

    model_config = SettingsConfigDict(
        env_prefix="SSH_",
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("private_key_path")
    @classmethod
    def validate_private_key_path(cls, v: Path) -> Path:
        """Ensure the private key file can be read."""
        v = v.expanduser()
        if not v.is_file():
            raise ValueError(f"SSH private key not found: {v}")
        return v


class LLMSettings(BaseSettings):
    """OpenAI configuration for constraint name extraction."""

    api_key: SecretStr = Field(..., description="OpenAI API key")
    model: str = Field(default="gpt-4", description="Chat model used for extraction")
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Temperature for LLM responses (0.0 = deterministic)",
    )
    timeout: int = Field(
        default=60,
        gt=0,
        description="Request timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_ignore_empty=True,
        extra="ignore",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level when --debug is not given",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Log timestamp format",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_ignore_empty=True,
        extra="ignore",
    )

    def configure(self, debug: bool = False) -> None:
        """
        Configure Python logging. Records go to stderr; stdout carries the prompt.

        Outside debug mode the sshtunnel and paramiko loggers are silenced.
        """
        logging.basicConfig(
            level=logging.DEBUG if debug else getattr(logging, self.level),
            format=self.format,
            datefmt=self.date_format,
            handlers=[logging.StreamHandler()],
            force=True,
        )
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET if debug else logging.CRITICAL + 1)


class Settings(BaseModel):
    """
    Complete configuration for one diagnosis run.

    Environment Variables:
        DB_HOST, DB_USER, DB_PASSWORD, DB_NAME, DB_PORT: target database
        SSH_HOST, SSH_PORT, SSH_USERNAME, SSH_PRIVATE_KEY_PATH, SSH_PASSPHRASE:
            tunnel endpoint and credentials
        OPENAI_API_KEY: key for the extraction model
        LOG_*: logging configuration (see LoggingSettings)
    """

    database: DatabaseSettings
    ssh: SSHSettings
    llm: LLMSettings
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = ConfigDict(frozen=True)


_SECTIONS: dict[str, type[BaseSettings]] = {
    "database": DatabaseSettings,
    "ssh": SSHSettings,
    "llm": LLMSettings,
    "logging": LoggingSettings,
}


def _env_name(section: type[BaseSettings], field_name: str) -> str:
    prefix = section.model_config.get("env_prefix", "")
    return f"{prefix}{field_name}".upper()


def load_settings(env_file: str | Path | None = ".env") -> Settings:
    """
    Build and validate all configuration sections.

    Values already present in the environment win over the .env file.

    Raises:
        ConfigurationMissingError: If any required variable is absent
        ConfigurationError: If a value is present but invalid
    """
    if env_file is not None and Path(env_file).is_file():
        load_dotenv(env_file, override=False)

    sections: dict[str, BaseSettings] = {}
    missing: list[str] = []
    invalid: list[str] = []
    for name, section in _SECTIONS.items():
        try:
            sections[name] = section()
        except ValidationError as exc:
            for error in exc.errors():
                env_name = _env_name(section, str(error["loc"][0]))
                if error["type"] == "missing":
                    missing.append(env_name)
                else:
                    invalid.append(f"{env_name}: {error['msg']}")

    if missing:
        raise ConfigurationMissingError(missing)
    if invalid:
        raise ConfigurationError("Invalid configuration: " + "; ".join(invalid))
    return Settings(**sections)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings, loading them on first use."""
    return load_settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (used by tests that change the environment)."""
    get_settings.cache_clear()
