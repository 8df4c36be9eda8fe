"""Gateway configuration management.

Configuration sources (in priority order):
1. Environment variables (GATEWAY_ prefix, ``__`` for nesting)
2. Config file (config.yaml)
3. Defaults

``Settings`` is the raw, cached view of those sources. The security-relevant
part is frozen into an ``AuthConfig`` once at startup and handed to the
services that need it; nothing reads secrets from ``Settings`` afterwards.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from erp_gateway.errors import ConfigurationError

MASTER_KEY_LENGTH = 32
DEFAULT_SIGNATURE_TTL_SECONDS = 300


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class DatabaseConfig(BaseModel):
    """Database configuration."""

    # SQLite by default; postgresql+asyncpg:// works the same way
    url: str = "sqlite+aiosqlite:///./gateway.db"
    echo: bool = False


class GraphQLConfig(BaseModel):
    """GraphQL endpoint configuration."""

    path: str = "/graphql"
    graphiql: bool = False


class SecurityConfig(BaseModel):
    """API authentication configuration."""

    # AES-256-GCM key for client secrets at rest, exactly 32 bytes (UTF-8)
    master_key: SecretStr | None = None

    # Static key guarding credential issuance (X-Admin-Key)
    admin_key: SecretStr | None = None

    # Key of the ERP's cipher for stored account passwords.
    # None = same value as master_key (single ERP parameter setups).
    account_password_key: SecretStr | None = None

    # Replay window for X-Timestamp
    signature_ttl_seconds: int = Field(default=DEFAULT_SIGNATURE_TTL_SECONDS, gt=0)

    # False keeps the historical one-sided check (only stale requests rejected)
    reject_future_timestamps: bool = False


class Settings(BaseSettings):
    """Gateway application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    graphql: GraphQLConfig = Field(default_factory=GraphQLConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # File values arrive as init kwargs; environment must win over them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings


@dataclass(frozen=True)
class AuthConfig:
    """Immutable authentication settings, validated once at startup."""

    master_key: bytes
    admin_key: str
    account_password_key: str
    signature_ttl_seconds: int = DEFAULT_SIGNATURE_TTL_SECONDS
    reject_future_timestamps: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> AuthConfig:
        """Build the auth config, refusing to start on missing or malformed keys.

        Raises:
            ConfigurationError: If the admin key is unset or the master key
                is not exactly 32 bytes.
        """
        security = settings.security

        if security.master_key is None or not security.master_key.get_secret_value():
            raise ConfigurationError("GATEWAY_SECURITY__MASTER_KEY is not defined.")
        master_key = security.master_key.get_secret_value().encode("utf-8")
        if len(master_key) != MASTER_KEY_LENGTH:
            raise ConfigurationError(
                f"Encryption master key is not valid (must be {MASTER_KEY_LENGTH} bytes)."
            )

        if security.admin_key is None or not security.admin_key.get_secret_value():
            raise ConfigurationError("GATEWAY_SECURITY__ADMIN_KEY is not defined.")

        if security.account_password_key is not None:
            account_password_key = security.account_password_key.get_secret_value()
        else:
            account_password_key = security.master_key.get_secret_value()

        return cls(
            master_key=master_key,
            admin_key=security.admin_key.get_secret_value(),
            account_password_key=account_password_key,
            signature_ttl_seconds=security.signature_ttl_seconds,
            reject_future_timestamps=security.reject_future_timestamps,
        )


def _load_config_file() -> dict:
    """Load configuration from YAML file if exists.

    Looks for config file in order:
    1. GATEWAY_CONFIG_FILE environment variable
    2. ./config.yaml
    3. /etc/erp-gateway/config.yaml
    """
    config_paths = [
        os.environ.get("GATEWAY_CONFIG_FILE"),
        Path("config.yaml"),
        Path("/etc/erp-gateway/config.yaml"),
    ]

    for path in config_paths:
        if path is None:
            continue
        path = Path(path)
        if path.exists():
            with open(path) as f:
                return yaml.safe_load(f) or {}

    return {}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Configuration is loaded from:
    1. YAML config file (if exists)
    2. Environment variables (override)
    3. Defaults
    """
    file_config = _load_config_file()
    return Settings(**file_config)
