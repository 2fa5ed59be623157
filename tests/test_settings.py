from decimal import Decimal

from backend.app.core.settings import Settings, get_settings


def test_settings_defaults():
    settings = get_settings()
    assert settings.app_name == "Timebill"
    assert isinstance(settings.secret_key, str) and settings.secret_key
    assert isinstance(settings.database_url, str) and settings.database_url


def test_billing_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TIMEBILL_VAT_PERCENTAGE", "21")
    monkeypatch.setenv("TIMEBILL_DEFAULT_PAYMENT_TERMS", "30")
    settings = Settings()
    assert settings.vat_percentage == Decimal("21")
    assert settings.default_payment_terms == 30


def test_billing_settings_defaults(monkeypatch):
    monkeypatch.delenv("TIMEBILL_VAT_PERCENTAGE", raising=False)
    monkeypatch.delenv("TIMEBILL_DEFAULT_PAYMENT_TERMS", raising=False)
    settings = Settings()
    assert settings.vat_percentage == Decimal("25")
    assert settings.default_payment_terms == 14
