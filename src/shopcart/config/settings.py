from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, uppercase_keys

class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("logs/shopcart")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    LOG_USE_QUEUE: bool = False

    # Orders
    ORDER_ID_PREFIX: str = "ORDER"

    # Tax (rates are fractions, keyed by upper-case location code)
    TAX_RATES: dict[str, float] = Field(
        default_factory=lambda: {"US": 0.08, "CA": 0.12, "EU": 0.20}
    )
    DEFAULT_TAX_RATE: float = Field(default=0.05, ge=0)

    # Discounts
    VIP_CUSTOMER_MARKER: str = "vip"
    VIP_DISCOUNT_RATE: float = Field(default=0.10, ge=0, le=1)
    BULK_DISCOUNT_THRESHOLD: float = Field(default=500, ge=0)
    BULK_DISCOUNT_AMOUNT: float = Field(default=50, ge=0)

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL environment variable value to uppercase.

        Runs before the Literal check, so `LOG_LEVEL=debug` is accepted and
        stored as "DEBUG", the spelling the logging module expects.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("TAX_RATES", mode="after")
    def normalize_tax_locations(cls, v: dict[str, float]) -> dict[str, float]:
        """
        Upper-case every location code so lookups are case-insensitive.
        """
        return uppercase_keys(v)

    # --- SettingsConfigDict settings ---
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached; tests that change the environment call get_settings.cache_clear().
@lru_cache()
def get_settings() -> Settings:
    return Settings()
