"""
Core constants and limits.

Defines solver budgets, document format patterns and application defaults.
"""

import re

# XIRR solver defaults
XIRR_DEFAULT_GUESS = 0.10
XIRR_MAX_NEWTON_ITERATIONS = 50
XIRR_TOLERANCE = 1e-10
XIRR_MIN_STEP = 1e-12  # Newton stops when the rate moves less than this
XIRR_RATE_FLOOR = -0.999999999  # Keeps (1 + rate) positive during Newton steps
DAYS_PER_YEAR = 365.0

# Bisection fallback
BISECTION_LOW = -0.9999
BISECTION_HIGH = 10.0  # 1000% annualized upper bound before expansion
BISECTION_MAX_EXPANSIONS = 50
BISECTION_MAX_ITERATIONS = 200
BISECTION_MIN_WIDTH = 1e-12

# Document format
DOCUMENT_INDENT = 2
DOCUMENT_ENCODING = "utf-8"
DOCUMENT_SUFFIX = ".velfi"
ISO_DATETIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", re.ASCII)

# Settings defaults
DEFAULT_LOCALE = "de-ch"
DEFAULT_AUTOSAVE = True
DEFAULT_BASE_CURRENCY = "CHF"
DEFAULT_CURRENCIES = ("CHF", "USD", "EUR")
DEFAULT_TAX_REPORT_HIDDEN_FIELDS = (
    "irr",
    "committed",
    "totalInvested",
    "openCommitment",
    "invested",
    "divested",
)
SETTINGS_APP_DIR = "portfolio-tracker"
SETTINGS_FILE_NAME = "config.json"
SETTINGS_PATH_ENV = "PORTFOLIO_TRACKER_CONFIG"

# Rate sources
FRANKFURTER_BASE_URL = "https://api.frankfurter.dev/v1"
FRANKFURTER_CACHE_SIZE = 64
FRANKFURTER_CACHE_TTL = 3600  # seconds
