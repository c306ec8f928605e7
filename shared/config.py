"""Configuration helpers for environment variables."""

from __future__ import annotations

import os
import logging

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


_DEFAULT_TIMEOUT_SECONDS = 10.0
_DEFAULT_FREQUENCY = "last-7-days"
_FREQUENCY_VALUES = {"last-7-days", "last-30-days", "last-365-days", "custom"}


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def ledger_api_url() -> str | None:
    """Return the remote ledger base URL when configured."""
    raw_value = (get_env("LEDGER_API_URL", "") or "").strip().rstrip("/")
    return raw_value or None


def ledger_api_token() -> str | None:
    """Return the bearer token forwarded to the remote ledger."""
    raw_value = (get_env("LEDGER_API_TOKEN", "") or "").strip()
    return raw_value or None


def ledger_api_timeout_seconds() -> float:
    """Return the per-request timeout, falling back to the default on bad input."""
    raw_value = (get_env("LEDGER_API_TIMEOUT_SECONDS", "") or "").strip()
    if not raw_value:
        return _DEFAULT_TIMEOUT_SECONDS

    try:
        timeout = float(raw_value)
    except ValueError:
        logger.warning("ledger_api_timeout_invalid value=%s", raw_value)
        return _DEFAULT_TIMEOUT_SECONDS

    if timeout <= 0:
        logger.warning("ledger_api_timeout_invalid value=%s", raw_value)
        return _DEFAULT_TIMEOUT_SECONDS
    return timeout


def ledger_user_id() -> str | None:
    """Return the authenticated user id used for local sessions."""
    raw_value = (get_env("LEDGER_USER_ID", "") or "").strip()
    return raw_value or None


def default_frequency() -> str:
    """Return the frequency preset selected when the page opens."""
    raw_value = (get_env("LEDGER_DEFAULT_FREQUENCY", "") or "").strip().lower()
    if raw_value in _FREQUENCY_VALUES:
        return raw_value
    if raw_value:
        logger.warning("ledger_default_frequency_invalid value=%s", raw_value)
    return _DEFAULT_FREQUENCY
