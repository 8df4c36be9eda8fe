"""Unit tests for gateway settings and the startup auth config."""

from __future__ import annotations

import pytest

from erp_gateway.config import AuthConfig, SecurityConfig, Settings, get_settings
from erp_gateway.errors import ConfigurationError
from tests.fakes import ACCOUNT_PASSWORD_KEY, ADMIN_KEY, MASTER_KEY


def _settings(**security) -> Settings:
    return Settings(security=SecurityConfig(**security))


class TestAuthConfig:
    def test_valid_settings(self):
        config = AuthConfig.from_settings(
            _settings(
                master_key=MASTER_KEY,
                admin_key=ADMIN_KEY,
                account_password_key=ACCOUNT_PASSWORD_KEY,
                signature_ttl_seconds=60,
            )
        )

        assert config.master_key == MASTER_KEY.encode("utf-8")
        assert config.admin_key == ADMIN_KEY
        assert config.account_password_key == ACCOUNT_PASSWORD_KEY
        assert config.signature_ttl_seconds == 60
        assert config.reject_future_timestamps is False

    def test_password_key_defaults_to_master_key(self):
        config = AuthConfig.from_settings(_settings(master_key=MASTER_KEY, admin_key=ADMIN_KEY))

        assert config.account_password_key == MASTER_KEY

    def test_immutable(self):
        config = AuthConfig.from_settings(_settings(master_key=MASTER_KEY, admin_key=ADMIN_KEY))

        with pytest.raises(AttributeError):
            config.admin_key = "other"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "security",
        [
            {"admin_key": ADMIN_KEY},
            {"master_key": "", "admin_key": ADMIN_KEY},
            {"master_key": "x" * 31, "admin_key": ADMIN_KEY},
            {"master_key": "é" * 32, "admin_key": ADMIN_KEY},
            {"master_key": MASTER_KEY},
            {"master_key": MASTER_KEY, "admin_key": ""},
        ],
    )
    def test_refuses_invalid_keys(self, security):
        with pytest.raises(ConfigurationError):
            AuthConfig.from_settings(_settings(**security))

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValueError):
            SecurityConfig(signature_ttl_seconds=0)


class TestSettingsSources:
    @pytest.fixture(autouse=True)
    def _fresh_settings(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_defaults(self):
        settings = get_settings()

        assert settings.security.signature_ttl_seconds == 300
        assert settings.security.master_key is None
        assert settings.graphql.path == "/graphql"

    def test_yaml_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        config_file = tmp_path / "gateway.yaml"
        config_file.write_text(
            "security:\n  admin_key: from-file\n  signature_ttl_seconds: 120\n"
        )
        monkeypatch.setenv("GATEWAY_CONFIG_FILE", str(config_file))

        settings = get_settings()

        assert settings.security.admin_key.get_secret_value() == "from-file"
        assert settings.security.signature_ttl_seconds == 120

    def test_environment_overrides_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("security:\n  admin_key: from-file\n")
        monkeypatch.setenv("GATEWAY_SECURITY__ADMIN_KEY", "from-env")

        settings = get_settings()

        assert settings.security.admin_key.get_secret_value() == "from-env"

    def test_secrets_not_in_repr(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GATEWAY_SECURITY__MASTER_KEY", MASTER_KEY)

        settings = get_settings()

        assert MASTER_KEY not in repr(settings)
