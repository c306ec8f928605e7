"""Tests for shared configuration helpers."""

from shared import config


def test_ledger_api_url_strips_trailing_slash(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_API_URL", " https://ledger.example.com/api/ ")

    assert config.ledger_api_url() == "https://ledger.example.com/api"


def test_ledger_api_url_defaults_to_none(monkeypatch) -> None:
    monkeypatch.delenv("LEDGER_API_URL", raising=False)

    assert config.ledger_api_url() is None


def test_ledger_api_timeout_defaults_when_missing(monkeypatch) -> None:
    monkeypatch.delenv("LEDGER_API_TIMEOUT_SECONDS", raising=False)

    assert config.ledger_api_timeout_seconds() == 10.0


def test_ledger_api_timeout_parses_float(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_API_TIMEOUT_SECONDS", "2.5")

    assert config.ledger_api_timeout_seconds() == 2.5


def test_ledger_api_timeout_uses_default_on_invalid(monkeypatch, caplog) -> None:
    monkeypatch.setenv("LEDGER_API_TIMEOUT_SECONDS", "soon")

    assert config.ledger_api_timeout_seconds() == 10.0
    assert "ledger_api_timeout_invalid" in caplog.text


def test_ledger_api_timeout_rejects_non_positive(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_API_TIMEOUT_SECONDS", "0")

    assert config.ledger_api_timeout_seconds() == 10.0


def test_ledger_user_id_blank_is_none(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_USER_ID", "   ")

    assert config.ledger_user_id() is None


def test_default_frequency_defaults_to_last_week(monkeypatch) -> None:
    monkeypatch.delenv("LEDGER_DEFAULT_FREQUENCY", raising=False)

    assert config.default_frequency() == "last-7-days"


def test_default_frequency_accepts_known_preset(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_DEFAULT_FREQUENCY", "LAST-30-DAYS")

    assert config.default_frequency() == "last-30-days"


def test_default_frequency_warns_on_unknown_preset(monkeypatch, caplog) -> None:
    monkeypatch.setenv("LEDGER_DEFAULT_FREQUENCY", "fortnight")

    assert config.default_frequency() == "last-7-days"
    assert "ledger_default_frequency_invalid" in caplog.text
