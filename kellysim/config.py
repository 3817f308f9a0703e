from pydantic_settings import BaseSettings
from decimal import Decimal
from typing import List
import json


class Settings(BaseSettings):
    # CORS
    CORS_ORIGINS: str = '["http://localhost:3000"]'

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Input guards (reject instead of running for ages)
    MAX_DAY_COUNT: int = 10000
    MAX_GAMES_PER_DAY: int = 100
    MAX_BANKROLL: Decimal = Decimal("1e15")  # Any strategy past this (either sign) aborts the run

    # Log formatting
    CURRENCY_SYMBOL: str = "¥"

    @property
    def cors_origins_list(self) -> List[str]:
        return json.loads(self.CORS_ORIGINS)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
