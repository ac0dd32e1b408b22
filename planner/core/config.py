from fastapi import Request
from pydantic import field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str
    REDIS_URL: str

    # Outbound mail
    SMTP_HOST: str
    SMTP_PORT: int = 465
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_SSL: bool = True
    MAIL_FROM_NAME: str = "Equipe plann.er"
    MAIL_FROM_ADDRESS: str = "oi@plann.er"

    # Links embedded in emails point at the API, redirects point at the web app
    API_BASE_URL: str = "http://localhost:3333"
    WEB_BASE_URL: str = "http://localhost:3333"
    CORS_ORIGINS: str = "http://localhost:3333"

    HOST: str = "0.0.0.0"
    PORT: int = 3333

    TRIP_CACHE_TTL_SECONDS: int = 1800
    LOG_LEVEL: str = "INFO"

    PROJECT_NAME: str = "plann.er API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Trip planning with emailed confirmations"

    class Config:
        env_file = ".env"

    @field_validator("API_BASE_URL", "WEB_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return value

    @field_validator("PORT", "SMTP_PORT")
    @classmethod
    def check_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value}")
        return value

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings
