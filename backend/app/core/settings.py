import os
from decimal import Decimal


class Settings:
    def __init__(self):
        self.app_name = "Timebill"
        self.api_version = "1.0.0"
        self.environment = os.getenv("TIMEBILL_ENVIRONMENT", "development")
        self.secret_key = os.getenv("TIMEBILL_SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = int(os.getenv("TIMEBILL_ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("TIMEBILL_DATABASE_URL", "sqlite:///./timebill.db")
        self.vat_percentage = Decimal(os.getenv("TIMEBILL_VAT_PERCENTAGE", "25"))
        self.default_payment_terms = int(os.getenv("TIMEBILL_DEFAULT_PAYMENT_TERMS", "14"))
        self.log_level = os.getenv("TIMEBILL_LOG_LEVEL", "INFO")


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
