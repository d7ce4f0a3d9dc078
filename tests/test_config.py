"""Tests for Settings parsing."""
from vies_proxy.core.config import Settings


def test_allowed_origins_list_splits_and_strips(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", " https://a.example.com , ,https://b.example.com")
    assert Settings().allowed_origins_list == ["https://a.example.com", "https://b.example.com"]


def test_allowed_origins_empty_means_none(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "")
    assert Settings().allowed_origins_list == []


def test_timeout_defaults_to_12s(monkeypatch):
    monkeypatch.delenv("FETCH_TIMEOUT_MS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.fetch_timeout_ms == 12000
    assert settings.fetch_timeout_seconds == 12.0


def test_timeout_from_env(monkeypatch):
    monkeypatch.setenv("FETCH_TIMEOUT_MS", "8000")
    assert Settings().fetch_timeout_seconds == 8.0


def test_blank_requester_is_none(monkeypatch):
    monkeypatch.setenv("VIES_REQUESTER_VAT", "   ")
    assert Settings().vies_requester_vat is None


def test_requester_from_env(monkeypatch):
    monkeypatch.setenv("VIES_REQUESTER_VAT", " BE0404616494 ")
    assert Settings().vies_requester_vat == "BE0404616494"


def test_defaults(monkeypatch):
    monkeypatch.delenv("VIES_ENDPOINT_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.vies_endpoint_url.endswith("/taxation_customs/vies/services/checkVatService")
    assert settings.vies_user_agent == "VIES-Proxy/1.1"
    assert settings.port == 3000
