# movies_api/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "movies_service"
    env: str = Field(default="local")
    host: str = "0.0.0.0"
    port: int = 8080

    mongo_dsn: str = Field(
        default="mongodb://mongo:27017/movies",
        alias="MONGO_DSN"
    )
    mongo_db: str = "movies"
    # tests and offline tooling switch the startup ping off
    mongo_ping_on_startup: bool = Field(default=True,
                                        alias="MONGO_PING_ON_STARTUP")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    model_config = SettingsConfigDict(env_file="infra/.env",
                                      extra="ignore",
                                      populate_by_name=True)


settings = Settings()
