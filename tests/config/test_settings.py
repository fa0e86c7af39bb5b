"""Tests for RpcSettings: defaults, TOML, env vars and CLI flags."""

from pathlib import Path

import click
import pytest

from typedrpc.config.settings import RpcSettings


class TestRpcSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = RpcSettings.from_cli(start=tmp_path)
        assert settings.base_url == "http://127.0.0.1:8787"
        assert settings.environment == "development"
        assert settings.allowed_origin == "https://example.com"
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = RpcSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "typedrpc.toml"
        toml.write_text('base_url = "https://rpc.test"\nenvironment = "staging"\n')
        settings = RpcSettings.from_cli(start=tmp_path)
        assert settings.base_url == "https://rpc.test"
        assert settings.environment == "staging"
        assert settings.allowed_origin == "https://example.com"
        assert settings.config_path == toml

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "typedrpc.toml").write_text("")
        settings = RpcSettings.from_cli(start=tmp_path)
        assert settings.base_url == "http://127.0.0.1:8787"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "rpc.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('allowed_origin = "https://app.test"\n')
        settings = RpcSettings.from_cli(config_path=str(custom))
        assert settings.allowed_origin == "https://app.test"
        assert settings.config_path == custom

    def test_missing_explicit_config_path(self, tmp_path: Path) -> None:
        (tmp_path / "typedrpc.toml").write_text('environment = "staging"\n')
        settings = RpcSettings.from_cli(config_path=str(tmp_path / "nope.toml"), start=tmp_path)
        assert settings.environment == "development"
        assert settings.config_path is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "typedrpc.toml").write_text("base_url = \n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            RpcSettings.from_cli(start=tmp_path)

    def test_invalid_environment_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "typedrpc.toml").write_text('environment = "moon"\n')
        with pytest.raises(Exception):
            RpcSettings.from_cli(start=tmp_path)


class TestEnvVars:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "typedrpc.toml").write_text('base_url = "https://toml.test"\n')
        monkeypatch.setenv("TYPEDRPC_BASE_URL", "https://env.test")
        settings = RpcSettings.from_cli(start=tmp_path)
        assert settings.base_url == "https://env.test"

    def test_env_bool(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TYPEDRPC_VERBOSE", "true")
        assert RpcSettings.from_cli(start=tmp_path).verbose is True


class TestCliFlags:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = RpcSettings.from_cli(
            start=tmp_path, json_output=True, quiet=True, verbose=True, log_json=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
        assert settings.log_json is True

    def test_cli_flags_override_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TYPEDRPC_ENVIRONMENT", "staging")
        settings = RpcSettings.from_cli(start=tmp_path, environment="production")
        assert settings.environment == "production"

    def test_none_flags_fall_through(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TYPEDRPC_BASE_URL", "https://env.test")
        settings = RpcSettings.from_cli(start=tmp_path, base_url=None, verbose=None)
        assert settings.base_url == "https://env.test"
        assert settings.verbose is False
