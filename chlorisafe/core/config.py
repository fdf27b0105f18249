# chlorisafe/core/config.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, List, Union

from pydantic import Field, AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application environment settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # =========================================================
    # 1. Project
    # =========================================================
    PROJECT_NAME: str = Field(
        default="ChloriSafe Ct API", description="Title shown in the Swagger UI"
    )
    API_V1_STR: str = Field(default="/api/v1", description="API version prefix")

    APP_ENV: Literal["local", "dev", "test", "prod"] = Field(
        default="local",
        description="Runtime environment (local/dev/test/prod)",
    )

    # =========================================================
    # 2. CORS
    # =========================================================
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = Field(
        default=[], description="Allowed CORS origins (e.g. http://localhost:3000)"
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        """Accept a comma-separated string as well as a JSON list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # =========================================================
    # 3. Logging
    # =========================================================
    LOG_DIR: str = Field(default=".logs", description="Directory for the log file")
    LOG_LEVEL: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Console sink level"
    )
    LOG_TO_FILE: bool = Field(
        default=True, description="Also write a rotating DEBUG log file"
    )

    @property
    def log_dir_path(self) -> Path:
        """Absolute log directory (Path)."""
        return Path(self.LOG_DIR).resolve()


@lru_cache
def get_settings() -> Settings:
    """Singleton Settings instance (usable with FastAPI Depends)."""
    return Settings()


settings = get_settings()
