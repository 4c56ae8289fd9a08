"""Application settings, read from the environment and an optional ``.env`` file."""
from __future__ import annotations
from decimal import Decimal
from pathlib import Path
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATA_DIR: Path = Path("data")
    DB_FILENAME: str = "crewtime.db"

    # Company time zone; decides which Saturday closes the current week.
    TIMEZONE: str = "Pacific/Honolulu"

    DAILY_OVERTIME_THRESHOLD_SECONDS: int = Field(default=28800, gt=0)
    WEEKLY_OVERTIME_THRESHOLD_SECONDS: int = Field(default=144000, gt=0)
    PRIVATE_OVERTIME_MULTIPLIER: Decimal = Decimal("1.5")
    DAVIS_BACON_OVERTIME_DIVISOR: Decimal = Decimal("1.5")

    EPI_COMPANY_CODE: str = "1SI"

    # Shared secret for the budget reconciliation endpoint (called by a scheduler).
    API_KEY: SecretStr | None = None

    LOG_LEVEL: str = "INFO"

    @property
    def data_dir(self) -> Path:
        return self.DATA_DIR

    @property
    def db_path(self) -> Path:
        return self.DATA_DIR / self.DB_FILENAME

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"


settings = Settings()
