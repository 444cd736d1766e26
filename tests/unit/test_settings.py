"""
Unit tests for application settings and new portfolio defaults.
"""

import json
from pathlib import Path

import pytest

from portfolio_tracker.core.exceptions.portfolio import ConfigurationError
from portfolio_tracker.infrastructure.settings import AppSettings, new_portfolio


class TestAppSettings:
    """Tests for AppSettings persistence."""

    def test_should_have_defaults(self) -> None:
        settings = AppSettings()

        assert settings.locale == "de-ch"
        assert settings.autosave is True
        assert settings.default_base_currency == "CHF"
        assert settings.default_currencies == ["CHF", "USD", "EUR"]
        assert "openCommitment" in settings.tax_report_hidden_fields

    def test_should_load_defaults_when_file_missing(self, tmp_path: Path) -> None:
        settings = AppSettings.load(tmp_path / "config.json")

        assert settings == AppSettings()

    def test_should_round_trip_with_camel_case_keys(self, tmp_path: Path) -> None:
        """Test save then load and the on-disk key names."""
        path = tmp_path / "nested" / "config.json"
        settings = AppSettings(locale="en-us", autosave=False, default_base_currency="EUR")

        settings.save(path)
        raw = json.loads(path.read_text(encoding="utf-8"))

        assert raw["defaultBaseCurrency"] == "EUR"
        assert "taxReportHiddenFields" in raw
        assert AppSettings.load(path) == settings

    def test_should_reject_invalid_files(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{broken", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid settings file"):
            AppSettings.load(path)

        path.write_text('{"autosave": "sometimes"}', encoding="utf-8")
        with pytest.raises(ConfigurationError):
            AppSettings.load(path)

    def test_should_honour_path_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        override = tmp_path / "custom.json"
        monkeypatch.setenv("PORTFOLIO_TRACKER_CONFIG", str(override))

        assert AppSettings.default_path() == override

    def test_should_use_xdg_config_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PORTFOLIO_TRACKER_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert AppSettings.default_path() == tmp_path / "portfolio-tracker" / "config.json"


class TestNewPortfolio:
    """Tests for creating empty portfolios from settings."""

    def test_should_register_default_currencies(self) -> None:
        portfolio = new_portfolio(name="Fresh")

        assert portfolio.name == "Fresh"
        assert [c.iso for c in portfolio.currencies] == ["CHF", "USD", "EUR"]
        assert portfolio.base_currency is portfolio.currencies[0]
        assert portfolio.entities == []

    def test_should_put_base_currency_first_without_duplicates(self) -> None:
        settings = AppSettings(default_base_currency="EUR", default_currencies=["CHF", "EUR"])

        portfolio = new_portfolio(settings)

        assert [c.iso for c in portfolio.currencies] == ["EUR", "CHF"]
        assert portfolio.base_currency is portfolio.find_currency("EUR")
