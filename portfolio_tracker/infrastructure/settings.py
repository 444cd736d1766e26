"""
Application settings.

The settings document is opaque configuration for the editor shell (locale,
autosave, default currencies, hidden tax report fields). The core only
reads the default currencies when creating a new portfolio.
"""

import json
import os
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from portfolio_tracker.core.constants import (
    DEFAULT_AUTOSAVE,
    DEFAULT_BASE_CURRENCY,
    DEFAULT_CURRENCIES,
    DEFAULT_LOCALE,
    DEFAULT_TAX_REPORT_HIDDEN_FIELDS,
    DOCUMENT_ENCODING,
    SETTINGS_APP_DIR,
    SETTINGS_FILE_NAME,
    SETTINGS_PATH_ENV,
)
from portfolio_tracker.core.exceptions.portfolio import ConfigurationError
from portfolio_tracker.core.models import Currency, Portfolio


class AppSettings(BaseModel):
    """Persisted application settings (camelCase keys on disk)."""

    model_config = ConfigDict(populate_by_name=True)

    locale: str = DEFAULT_LOCALE
    autosave: bool = DEFAULT_AUTOSAVE
    default_base_currency: str = Field(
        default=DEFAULT_BASE_CURRENCY, alias="defaultBaseCurrency", min_length=1
    )
    default_currencies: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CURRENCIES), alias="defaultCurrencies"
    )
    tax_report_hidden_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TAX_REPORT_HIDDEN_FIELDS),
        alias="taxReportHiddenFields",
    )

    @staticmethod
    def default_path() -> Path:
        """Settings file location.

        The PORTFOLIO_TRACKER_CONFIG environment variable overrides the XDG
        config directory.
        """
        override = os.getenv(SETTINGS_PATH_ENV)
        if override:
            return Path(override).expanduser()
        config_home = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        return Path(config_home) / SETTINGS_APP_DIR / SETTINGS_FILE_NAME

    @classmethod
    def load(cls, path: Path | None = None) -> "AppSettings":
        """Load settings, returning defaults when the file does not exist.

        Raises:
            ConfigurationError: If the file exists but is not valid settings
        """
        path = path or cls.default_path()
        if not path.exists():
            logger.debug(f"No settings file at {path}, using defaults")
            return cls()
        try:
            raw = json.loads(path.read_text(encoding=DOCUMENT_ENCODING))
            return cls.model_validate(raw)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            raise ConfigurationError(f"Invalid settings file {path}: {e}") from e

    def save(self, path: Path | None = None) -> Path:
        """Write settings as indented JSON, creating the directory if needed."""
        path = path or self.default_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(by_alias=True, indent=2), encoding=DOCUMENT_ENCODING)
        logger.info(f"Saved settings to {path}")
        return path


def new_portfolio(settings: AppSettings | None = None, name: str = "") -> Portfolio:
    """Empty portfolio with the configured base currency and currency set."""
    settings = settings or AppSettings()
    codes = list(dict.fromkeys([settings.default_base_currency, *settings.default_currencies]))
    currencies = [Currency(iso=code) for code in codes]
    return Portfolio(base_currency=currencies[0], name=name, currencies=currencies)
