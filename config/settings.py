from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DB_URL: str = "sqlite+aiosqlite:///./time_tracker.db"
    DB_ECHO: bool = False
    DB_AUTOMIGRATE: bool = True
    DB_POOL_SIZE: int = 25
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_RECYCLE: int = 7200  # 2 часа

    # People service
    PEOPLE_SERVICE_URL: str = "http://localhost:8081"
    PEOPLE_SERVICE_TIMEOUT: float = 5.0

    HTTP_HOST: str = "localhost"
    HTTP_PORT: int = 8080

    ENVIRONMENT: str = "development"
    LOG_LEVEL: Optional[str] = None
    ALLOWED_ORIGINS: str = "*"

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    @property
    def origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DB_URL.startswith("sqlite")

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "INFO" if self.is_production else "DEBUG"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
