from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unknown env vars so a shared .env can also hold frontend settings.
    # Load backend/.env first, then the repo-root .env.
    model_config = SettingsConfigDict(env_file=(".env", "../.env"), case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "Immo-Auto API"
    ENVIRONMENT: str = "development"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = "change_me"
    REFRESH_SECRET_KEY: str = "change_me_too"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "immoauto"
    JWT_AUDIENCE: str = "immoauto-api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30

    DATABASE_URL: str = ""
    POSTGRES_SERVER: str = "db"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "immoauto"

    CELERY_BROKER_URL: str = "redis://redis:6379/1"
    CELERY_RESULT_BACKEND: str = "redis://redis:6379/2"
    CELERY_TASK_ALWAYS_EAGER: bool = False

    BACKEND_CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    FRONTEND_URL: str = "http://localhost:3000"
    ENABLE_API_DOCS: bool = True

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_LOCK_MINUTES: int = 15

    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024
    MAX_IMAGES_PER_UPLOAD: int = 10

    # "seller": only messages received as the listing's seller are counted by
    # /messages/unread. "participant": every conversation the user is part of.
    UNREAD_COUNT_SCOPE: Literal["seller", "participant"] = "seller"

    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM_EMAIL: str = "no-reply@immoauto.local"
    SMTP_USE_TLS: bool = True

    @model_validator(mode="after")
    def _prod_guards(self):
        if self.ENVIRONMENT.lower() == "production":
            if self.ENABLE_API_DOCS:
                raise ValueError("ENABLE_API_DOCS must be false in production")
            if len(self.SECRET_KEY) < 32 or len(self.REFRESH_SECRET_KEY) < 32:
                raise ValueError("SECRET_KEY and REFRESH_SECRET_KEY must be 32+ chars in production")
            if any(o == "*" for o in self.BACKEND_CORS_ORIGINS):
                raise ValueError('BACKEND_CORS_ORIGINS must not contain "*" in production')
        return self

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
