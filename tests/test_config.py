"""Tests for settings loading.

**Feature: trade-journal**
"""

from pathlib import Path

import pytest
import toml

from tradejournal.config import (
    CONFIG_ENV_VAR,
    ConfigError,
    Settings,
    create_template_config,
    get_config_path,
    load_settings,
)


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        settings = load_settings(tmp_path / "absent.toml")

        assert settings == Settings()
        assert settings.risk.daily_loss_goal == 200
        assert settings.calculator.deposit_currency == "USD"

    def test_values_from_file(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[journal]\n'
            f'db_path = "{(tmp_path / "j.db").as_posix()}"\n'
            'default_journal = "Main"\n'
            '[risk]\n'
            'daily_loss_goal = 350\n'
            '[calculator]\n'
            'deposit_currency = "gbp"\n'
        )

        settings = load_settings(path)

        assert settings.journal.db_path == tmp_path / "j.db"
        assert settings.journal.default_journal == "Main"
        assert settings.risk.daily_loss_goal == 350
        assert settings.calculator.deposit_currency == "GBP"

    def test_partial_file_keeps_other_defaults(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[risk]\ndaily_loss_goal = 90\n")

        settings = load_settings(path)

        assert settings.risk.daily_loss_goal == 90
        assert settings.calculator.deposit_currency == "USD"

    def test_db_path_expands_home(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[journal]\ndb_path = "~/journal.db"\n')

        settings = load_settings(path)

        assert settings.journal.db_path == Path.home() / "journal.db"

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[risk\n")

        with pytest.raises(ConfigError):
            load_settings(path)

    @pytest.mark.parametrize(
        "content",
        [
            "[risk]\ndaily_loss_goal = -5\n",
            '[calculator]\ndeposit_currency = "JPY"\n',
        ],
    )
    def test_invalid_values(self, tmp_path: Path, content: str):
        path = tmp_path / "config.toml"
        path.write_text(content)

        with pytest.raises(ConfigError):
            load_settings(path)


class TestConfigPath:
    def test_explicit_path_wins(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))

        assert get_config_path(tmp_path / "cli.toml") == tmp_path / "cli.toml"

    def test_environment_variable(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))

        assert get_config_path() == tmp_path / "env.toml"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

        assert get_config_path().name == "config.toml"
        assert get_config_path().parent.name == "tradejournal"


class TestTemplateConfig:
    def test_template_round_trips(self, tmp_path: Path):
        path = create_template_config(tmp_path / "sub" / "config.toml")

        data = toml.load(path)
        settings = load_settings(path)

        assert set(data) == {"journal", "risk", "calculator"}
        assert settings.risk.daily_loss_goal == 200
