from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from ``SALES_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(env_prefix="SALES_", env_file=".env", extra="ignore")

    APP_NAME: str = "Seller Sales Analytics"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # how many products each seller report lists
    TOP_PRODUCTS_LIMIT: int = Field(default=10, ge=1)

    # fill the in-memory store with demo data when the API starts
    SEED_ON_STARTUP: bool = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
