from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from fastapi import Depends
from typing_extensions import Annotated


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    redis_dsn: str = "redis://localhost:6379/0"
    redis_pool_size: int = 5
    redis_connect_timeout: int = 5  # seconds
    bcrypt_rounds: int = 10
    log_level: str = "INFO"
    api_prefix: str = "/api"


@lru_cache
def get_settings() -> Settings:
    return Settings()


SettingsDep = Annotated[Settings, Depends(get_settings)]
