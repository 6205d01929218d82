# filmorate_api/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "filmorate"
    env: str = Field(default="local")
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_dsn: str = Field(
        default="postgresql+psycopg://filmorate:filmorate"
                "@postgres:5432/filmorate",
        alias="DATABASE_DSN"
    )
    db_echo: bool = Field(default=False, alias="DB_ECHO")
    db_pool_size: int = Field(default=10, alias="DB_POOL_SIZE")

    # размеры выборок по умолчанию
    reviews_default_count: int = Field(default=10,
                                       alias="REVIEWS_DEFAULT_COUNT")
    popular_default_count: int = Field(default=10,
                                       alias="POPULAR_DEFAULT_COUNT")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    # Pydantic v2: модель конфигурации
    model_config = SettingsConfigDict(env_file="infra/.env",
                                      extra="ignore",
                                      populate_by_name=True)


settings = Settings()
