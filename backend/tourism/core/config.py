from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    app_name: str = "Tourism Booking API"
    environment: str = Field("local", alias="ENVIRONMENT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    secret_key: str = Field("change-me-in-production", alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(60 * 24, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    session_cookie_name: str = Field("tourism_session", alias="SESSION_COOKIE_NAME")
    # Comma-separated; empty means localhost defaults.
    cors_origins: str = Field("", alias="CORS_ORIGINS")
    admin_emails: str = Field("admin@fortistourism.com", alias="ADMIN_EMAILS")

    seed_destinations: bool = Field(True, alias="SEED_DESTINATIONS")
    active_user_window_days: int = Field(30, alias="ACTIVE_USER_WINDOW_DAYS")

    stripe_secret_key: Optional[str] = Field(None, alias="STRIPE_SECRET_KEY")
    stripe_api_base: str = Field("https://api.stripe.com/v1", alias="STRIPE_API_BASE")
    stripe_price_id: str = Field("price_default", alias="STRIPE_PRICE_ID")
    stripe_currency: str = Field("usd", alias="STRIPE_CURRENCY")
    stripe_timeout: int = Field(15, alias="STRIPE_TIMEOUT")

    @property
    def admin_email_list(self) -> List[str]:
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    @property
    def cors_origin_list(self) -> List[str]:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["http://localhost:8501", "http://127.0.0.1:8501"]


@lru_cache()
def get_settings() -> Settings:
    load_dotenv(".env")
    return Settings()


settings = get_settings()
