"""Store-wide settings read from the environment.

Values are read on every call so tests and long-running workers pick up
changes without re-importing the module.
"""

import os

DEFAULT_STORE_NAME = "Pashudh"
DEFAULT_CURRENCY = "INR"
DEFAULT_SITE_URL = "http://localhost:3000"
DEFAULT_VOUCHER_PREFIX = "pashudh-"


def store_name() -> str:
    return os.environ.get("STORE_NAME", DEFAULT_STORE_NAME)


def store_currency() -> str:
    return os.environ.get("STORE_CURRENCY", DEFAULT_CURRENCY).upper()


def site_url(origin: str | None = None) -> str:
    """Return the caller's origin, falling back to the configured storefront URL."""
    return origin or os.environ.get("STORE_SITE_URL", DEFAULT_SITE_URL)


def voucher_prefix() -> str:
    return os.environ.get("VOUCHER_PREFIX", DEFAULT_VOUCHER_PREFIX)
