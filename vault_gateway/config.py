"""Configuration management using Pydantic Settings"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gateway configuration loaded from VAULT_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="VAULT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Record store
    endpoint_url: str
    collection_field: str = "userDatabase"  # Sheety nests rows under the sheet name

    # Reconciliation
    poll_interval_ms: int = Field(default=30_000, gt=0)

    # Informational only
    app_name: str = "MENA Dominion Bank"
    version: str = "5.0.4"

    # Service
    service_name: str = "vault-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Record fallbacks for columns left empty in the sheet
    default_currency: str = "USD"
    default_credit_score: str = "700"
    default_account_status: str = "Active"

    # Presentation
    avatar_base_url: str = "https://ui-avatars.com/api/"

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once from the environment"""
    return Settings()
