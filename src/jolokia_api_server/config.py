# src/jolokia_api_server/config.py

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env is at the project root, two levels up from src/jolokia_api_server/
CONFIG_FILE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT_DIR = CONFIG_FILE_DIR.parent.parent
ENV_FILE_PATH = PROJECT_ROOT_DIR / ".env"

# Bundled self-signed material used outside production
DEV_CERT_DIR = CONFIG_FILE_DIR / "certs"
DEV_KEY_PATH = DEV_CERT_DIR / "domain.key"
DEV_CERT_PATH = DEV_CERT_DIR / "domain.crt"

if ENV_FILE_PATH.exists():
    load_dotenv(dotenv_path=ENV_FILE_PATH, override=False)


class Settings(BaseSettings):
    # === Token signing ===
    SECRET_ACCESS_TOKEN: str

    # === Runtime mode ===
    NODE_ENV: str = "development"
    PRODUCTION_HOST_MARKER: str = "wconsj"

    # === TLS (production only) ===
    SERVER_KEY: Optional[str] = None
    SERVER_CERT: Optional[str] = None

    # === Plugin identity ===
    PLUGIN_NAME: str = "activemq-artemis-jolokia-api-server"
    PLUGIN_VERSION: str = "0.1.0"

    # === Remote Jolokia endpoint ===
    JOLOKIA_VERIFY_TLS: bool = False
    JOLOKIA_TIMEOUT_SECONDS: float = 10.0

    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("SECRET_ACCESS_TOKEN")
    @classmethod
    def secret_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("SECRET_ACCESS_TOKEN must not be empty.")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
