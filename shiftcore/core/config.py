from functools import lru_cache
from typing import Literal

from pydantic import computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self

from shiftcore.domain.scheduling.value_objects.enums import TransactionPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SHIFTCORE_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "shiftcore"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Database
    DATABASE_URL: str = "sqlite://"
    SQL_ECHO: bool = False
    DATABASE_POOL_PRE_PING: bool = True

    # Labour rules
    MIN_REST_HOURS: float = 8.0
    MAX_WEEKLY_HOURS: float = 40.0

    # Generation
    GENERATION_TRANSACTION_POLICY: TransactionPolicy = TransactionPolicy.PER_SHIFT_DAY
    UNIQUE_CONFLICT_RETRIES: int = 1

    # Events
    EVENT_HISTORY_SIZE: int = 1000

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        # Normalise bare postgres URLs onto the psycopg driver
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+psycopg://", 1)
        elif self.DATABASE_URL.startswith("postgres://"):
            return self.DATABASE_URL.replace("postgres://", "postgresql+psycopg://", 1)
        return self.DATABASE_URL

    @model_validator(mode="after")
    def _check_labour_rules(self) -> Self:
        if self.MIN_REST_HOURS < 0:
            raise ValueError("MIN_REST_HOURS must not be negative")
        if self.MAX_WEEKLY_HOURS <= 0:
            raise ValueError("MAX_WEEKLY_HOURS must be positive")
        if self.UNIQUE_CONFLICT_RETRIES < 0:
            raise ValueError("UNIQUE_CONFLICT_RETRIES must not be negative")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
