# app/config.py
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./transactions.db"

    # Upstream dataset consumed by /api/init. Anything that isn't http(s) is read as a local file.
    SEED_DATA_URL: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    SEED_TIMEOUT: float = 30.0

    # Every month name is resolved against this year
    QUERY_YEAR: int = 2023

    CORS_ALLOW_ORIGINS: str = "*"
    RESEED_CRON: str = "0 3 * * *"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")

    def get_database_url(self):
        # Some hosts still hand out 'postgres://'
        if self.DATABASE_URL.startswith("postgres://"):
            return self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
        return self.DATABASE_URL

    def get_cors_origins(self):
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]

settings = Settings()

def configure_logging(level=None):
    """Applies LOG_LEVEL to the root logger. Safe to call more than once."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
