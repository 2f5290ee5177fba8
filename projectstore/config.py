from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database settings
    DATABASE_URL: str = "sqlite:///projectstore.db"
    SQL_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Pagination
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 500


settings = Settings()
