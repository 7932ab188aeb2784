"""Unit tests for environment configuration."""

from pathlib import Path

import pytest

from tally import config
from tally.config import InvalidSettingError, KernelSettings

# pylint: disable=magic-value-comparison


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without TALLY_ variables."""
    for name in (
        config.DB_URL_ENV,
        config.MAX_SAVE_ATTEMPTS_ENV,
        config.DEFAULT_CURRENCY_ENV,
    ):
        monkeypatch.delenv(name, raising=False)


class TestGetDbUrl:
    """Tests for get_db_url."""

    @staticmethod
    def test_returns_env_value(monkeypatch: pytest.MonkeyPatch):
        """The URL comes straight from TALLY_DB_URL."""
        monkeypatch.setenv(config.DB_URL_ENV, "sqlite:///tally.db")
        assert config.get_db_url() == "sqlite:///tally.db"

    @staticmethod
    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_raises(monkeypatch: pytest.MonkeyPatch, value):
        """Unset or empty TALLY_DB_URL raises DatabaseUrlNotSetError."""
        if value is not None:
            monkeypatch.setenv(config.DB_URL_ENV, value)
        with pytest.raises(config.DatabaseUrlNotSetError):
            config.get_db_url()


class TestLoadSettings:
    """Tests for load_settings."""

    @staticmethod
    def test_defaults():
        """Without variables, defaults are used."""
        assert config.load_settings() == KernelSettings(
            max_save_attempts=3, default_currency="USD"
        )

    @staticmethod
    def test_reads_environment(monkeypatch: pytest.MonkeyPatch):
        """Variables override the defaults; currency is normalized."""
        monkeypatch.setenv(config.MAX_SAVE_ATTEMPTS_ENV, "7")
        monkeypatch.setenv(config.DEFAULT_CURRENCY_ENV, " eur ")
        assert config.load_settings() == KernelSettings(
            max_save_attempts=7, default_currency="EUR"
        )

    @staticmethod
    @pytest.mark.parametrize("value", ["zero", "0", "-2", "1.5"])
    def test_rejects_bad_attempts(monkeypatch: pytest.MonkeyPatch, value):
        """Non-integer or non-positive attempt counts are refused."""
        monkeypatch.setenv(config.MAX_SAVE_ATTEMPTS_ENV, value)
        with pytest.raises(InvalidSettingError) as e:
            config.load_settings()
        assert e.value.name == config.MAX_SAVE_ATTEMPTS_ENV

    @staticmethod
    def test_rejects_bad_currency(monkeypatch: pytest.MonkeyPatch):
        """Currency codes must be three letters."""
        monkeypatch.setenv(config.DEFAULT_CURRENCY_ENV, "DOLLARS")
        with pytest.raises(InvalidSettingError):
            config.load_settings()


class TestKernelSettings:
    """Tests for KernelSettings validation."""

    @staticmethod
    def test_rejects_zero_attempts():
        """At least one save attempt is required."""
        with pytest.raises(InvalidSettingError):
            KernelSettings(max_save_attempts=0)

    @staticmethod
    def test_rejects_lowercase_currency():
        """Settings expect an already-normalized currency."""
        with pytest.raises(InvalidSettingError):
            KernelSettings(default_currency="usd")

    @staticmethod
    def test_is_frozen():
        """Settings cannot change once built."""
        settings = KernelSettings()
        with pytest.raises(AttributeError):
            settings.max_save_attempts = 9  # type: ignore[misc]


def test_build_alembic_config_points_at_packaged_scripts():
    """The Alembic config uses the packaged migrations and the given URL."""
    cfg = config.build_alembic_config("sqlite:///x.db")
    assert cfg.get_main_option("sqlalchemy.url") == "sqlite:///x.db"
    script_location = Path(cfg.get_main_option("script_location"))
    assert (script_location / "env.py").is_file()
    assert (script_location / "versions").is_dir()


def test_build_alembic_config_without_url():
    """The URL is optional for commands that do not connect."""
    assert config.build_alembic_config().get_main_option("sqlalchemy.url") is None
