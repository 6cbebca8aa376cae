from pydantic_settings import BaseSettings
from pydantic import model_validator
from urllib.parse import quote_plus
from typing import List
import os

class Settings(BaseSettings):
    APP_ENV: str = "local"
    APP_NAME: str = "Party Ledger"

    # Database URL - can be provided directly or constructed from components
    DATABASE_URL: str | None = None

    # Individual database components (for constructing DATABASE_URL)
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = ""

    # Currency (KWD uses 3 decimal places)
    CURRENCY_CODE: str = "KWD"
    CURRENCY_DECIMALS: int = 3

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    LOG_LEVEL: str = "DEBUG"

    class Config:
        env_file = ".env" if os.getenv("APP_ENV", "local") == "local" else ".env.prod"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @model_validator(mode='after')
    def construct_database_url(self):
        """Construct DATABASE_URL from components if not provided directly."""
        if not self.DATABASE_URL:
            if not self.DB_NAME:
                # Local development falls back to a SQLite file
                if self.APP_ENV == "local":
                    self.DATABASE_URL = "sqlite:///./party_ledger.db"
                    return self
                raise ValueError("Either DATABASE_URL or DB_NAME must be provided")

            # URL encode password to handle special characters
            password_part = f":{quote_plus(self.DB_PASSWORD)}" if self.DB_PASSWORD else ""
            self.DATABASE_URL = f"postgresql://{self.DB_USER}{password_part}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

        return self

    @property
    def database_url(self) -> str:
        """Get DATABASE_URL as a guaranteed string."""
        if self.DATABASE_URL is None:
            raise ValueError("DATABASE_URL must be set")
        return self.DATABASE_URL

settings = Settings()
