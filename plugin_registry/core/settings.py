# plugin_registry/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    """
    Основные переменные окружения реестра плагинов.
    Значения берутся из окружения или из .env.
    """
    # Database
    DATABASE_URL: str = "sqlite:///./plugins.db"

    # App meta
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Пагинация списка плагинов
    PLUGINS_DEFAULT_COUNT: int = 15
    PLUGINS_MAX_COUNT: int = 100
    PLUGINS_DEFAULT_SORT: str = "name"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

settings = Settings()
