from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Окружение: production, development, testing
    ENV: str = Field(
        "production",
        description="Application environment",
    )
    DEBUG: bool = Field(
        False,
        description="Turn on debug mode (reload, detailed errors)",
    )

    # Подключение к БД (асинхронный URL SQLAlchemy: postgresql+asyncpg://, sqlite+aiosqlite://)
    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./smart_campus.db",
        description="Async SQLAlchemy database URL",
    )

    # Общие параметры API
    API_PREFIX: str = Field(
        "/api",
        description="Base prefix for all API routes",
    )
    APP_NAME: str = Field(
        "Smart Campus API",
        description="Application name for docs/title",
    )
    CORS_ORIGINS: list[str] = Field(
        ["*"],
        description="Allowed CORS origins for the dashboard front end",
    )

    # Логи
    LOG_LEVEL: str = Field(
        "INFO",
        description="Logging level",
    )
    LOG_DIR: str = Field(
        "logs",
        description="Directory for log files",
    )
    LOG_FILENAME: str = Field(
        "smart_campus.log",
        description="Log file name",
    )

    # Плановая очистка «осиротевших» записей (по умолчанию выключена)
    ORPHAN_SWEEP_ENABLED: bool = Field(
        False,
        description="Run the orphan cleanup sweep daily",
    )
    ORPHAN_SWEEP_HOUR: int = Field(
        3,
        ge=0,
        le=23,
        description="Hour of day for the orphan cleanup sweep",
    )

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


settings = Settings()
