"""Unit tests for config settings, loaders and the settings factory."""

from __future__ import annotations

import dataclasses
import os

import pytest

from mp_dal.config.settings import (
    DataAccessSettings,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SettingsFactory,
)
from mp_dal.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_dal.kernel.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # load_dotenv writes straight into os.environ
    clean = {k: v for k, v in os.environ.items() if not k.startswith("DAL_")}
    monkeypatch.setattr(os, "environ", clean)


# ---------------------------------------------------------------------------
# DataAccessSettings
# ---------------------------------------------------------------------------


class TestDataAccessSettings:
    def test_defaults(self) -> None:
        settings = DataAccessSettings(database_url="sqlite+aiosqlite:///:memory:")
        assert settings.echo is False
        assert settings.isolation_level is None
        assert settings.default_row_count == 10

    def test_empty_url(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            DataAccessSettings(database_url="")

    def test_unknown_isolation_level(self) -> None:
        with pytest.raises(InvalidSettingValueError, match="isolation_level"):
            DataAccessSettings(database_url="x", isolation_level="SNAPSHOT-ISH")

    def test_negative_row_count(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            DataAccessSettings(database_url="x", default_row_count=-1)

    def test_prefix_is_not_a_field(self) -> None:
        names = [f.name for f in dataclasses.fields(DataAccessSettings)]
        assert names == ["database_url", "echo", "isolation_level", "default_row_count"]
        assert DataAccessSettings._prefix == "DAL"

    def test_adapter_builds_from_settings(self) -> None:
        import mp_dal.adapters.sqlalchemy as adapter

        ctx = adapter.SqlAlchemyDataContext.from_settings(
            DataAccessSettings(database_url="sqlite+aiosqlite:///:memory:", isolation_level="SERIALIZABLE")
        )
        assert isinstance(ctx, adapter.SqlAlchemyDataContext)

    def test_config_errors_are_configuration_errors(self) -> None:
        assert issubclass(ConfigError, ConfigurationError)


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_and_coerces(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAL_DATABASE_URL", "postgresql+asyncpg://db/app")
        monkeypatch.setenv("DAL_ECHO", "true")
        monkeypatch.setenv("DAL_ISOLATION_LEVEL", "REPEATABLE READ")
        monkeypatch.setenv("DAL_DEFAULT_ROW_COUNT", "25")
        settings = EnvSettingsLoader().load(DataAccessSettings)
        assert settings.database_url == "postgresql+asyncpg://db/app"
        assert settings.echo is True
        assert settings.isolation_level == "REPEATABLE READ"
        assert settings.default_row_count == 25

    def test_empty_optional_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAL_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        monkeypatch.setenv("DAL_ISOLATION_LEVEL", "")
        assert EnvSettingsLoader().load(DataAccessSettings).isolation_level is None

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader().load(DataAccessSettings)
        assert exc_info.value.setting_name == "DAL_DATABASE_URL"

    def test_bad_integer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAL_DATABASE_URL", "x")
        monkeypatch.setenv("DAL_DEFAULT_ROW_COUNT", "many")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(DataAccessSettings)


class TestDotenvSettingsLoader:
    def test_reads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("DAL_DATABASE_URL=sqlite+aiosqlite:///app.db\nDAL_DEFAULT_ROW_COUNT=50\n")
        settings = DotenvSettingsLoader(str(env_file)).load(DataAccessSettings)
        assert settings.database_url == "sqlite+aiosqlite:///app.db"
        assert settings.default_row_count == 50

    def test_environment_wins_without_override(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("DAL_DATABASE_URL=from-file\n")
        monkeypatch.setenv("DAL_DATABASE_URL", "from-env")
        assert DotenvSettingsLoader(str(env_file)).load(DataAccessSettings).database_url == "from-env"


# ---------------------------------------------------------------------------
# SettingsFactory
# ---------------------------------------------------------------------------


class TestSettingsFactory:
    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAL_DATABASE_URL", "from-env")
        settings = SettingsFactory.create(
            DataAccessSettings,
            loaders=[EnvSettingsLoader()],
            overrides={"default_row_count": 5},
        )
        assert (settings.database_url, settings.default_row_count) == ("from-env", 5)

    def test_failing_loader_is_skipped(self) -> None:
        settings = SettingsFactory.create(
            DataAccessSettings,
            loaders=[EnvSettingsLoader()],
            overrides={"database_url": "sqlite+aiosqlite:///:memory:"},
        )
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"

    def test_missing_required_after_merge(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            SettingsFactory.create(DataAccessSettings, loaders=[EnvSettingsLoader()])

    def test_invalid_override(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SettingsFactory.create(DataAccessSettings, overrides={"database_url": "x", "default_row_count": -3})
