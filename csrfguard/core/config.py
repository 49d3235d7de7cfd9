from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_name: str = Field(default="csrfguard")
    secret_key: str = Field(...)
    csrf_secret: str = Field(...)
    csrf_token_source: Literal["clock", "random"] = Field(default="clock")
    session_cookie_name: str = Field(default="session")
    session_cookie_secure: bool = Field(default=True)
    session_cookie_max_age: int = Field(default=60 * 60 * 4)
    session_cookie_same_site: Literal["lax", "strict", "none"] = Field(default="lax")
    log_level: str = Field(default="INFO")
    csrf_log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_security(self) -> "Settings":
        if len(self.secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters long.")
        if not self.csrf_secret:
            raise ValueError("CSRF_SECRET must not be empty.")
        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()
