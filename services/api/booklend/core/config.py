from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# services/api/booklend/core/config.py -> BASE_DIR == services/api
BASE_DIR = Path(__file__).resolve().parents[2]


class OverlapPolicy(str, Enum):
    # start or end falls inside an approved range (legacy behaviour)
    endpoints = "endpoints"
    # any shared calendar day
    intersection = "intersection"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        extra="ignore",
        env_prefix="",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="dev", validation_alias="ENV")

    # Application
    api_name: str = Field(default="booklend-api", validation_alias="API_NAME")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Database
    database_url: str = Field(
        default="sqlite+pysqlite:///./booklend.db",
        validation_alias="DATABASE_URL",
    )
    auto_create_tables: bool = Field(
        default=True, validation_alias="AUTO_CREATE_TABLES"
    )

    # Auth
    password_hash_rounds: int = Field(
        default=10, ge=4, le=31, validation_alias="PASSWORD_HASH_ROUNDS"
    )
    bootstrap_admin_email: str | None = Field(
        default=None, validation_alias="BOOTSTRAP_ADMIN_EMAIL"
    )
    bootstrap_admin_password: str | None = Field(
        default=None, validation_alias="BOOTSTRAP_ADMIN_PASSWORD"
    )

    # Borrow workflow
    borrow_overlap_policy: OverlapPolicy = Field(
        default=OverlapPolicy.endpoints, validation_alias="BORROW_OVERLAP_POLICY"
    )
    approval_conflict_check: bool = Field(
        default=False, validation_alias="APPROVAL_CONFLICT_CHECK"
    )

    @field_validator("borrow_overlap_policy", mode="before")
    @classmethod
    def normalize_overlap_policy(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # CORS
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """
        Supported env formats:
          - JSON list: '["http://localhost:3000"]'
          - Bracket list (no quotes): '[http://localhost:3000, http://localhost:5173]'
          - Comma-separated: 'http://localhost:3000, http://localhost:5173'
          - '*' wildcard
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if not isinstance(v, str):
            raise TypeError("cors_origins must be a string or list of strings")

        s = v.strip()
        if not s:
            return []
        if s == "*":
            return ["*"]

        if s.startswith("[") and s.endswith("]"):
            try:
                parsed = json.loads(s)
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
            except json.JSONDecodeError:
                inner = s[1:-1].strip()
                if not inner:
                    return []
                parts = [p.strip().strip('"').strip("'") for p in inner.split(",")]
                return [p for p in parts if p]

        parts = [p.strip() for p in s.split(",")]
        return [p for p in parts if p]

    # Rate limiting
    redis_url: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )
    rate_limit_enabled: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")
    rate_limit_window_seconds: int = Field(
        default=60, validation_alias="RATE_LIMIT_WINDOW_SECONDS"
    )
    rate_limit_borrow_requests_per_window: int = Field(
        default=20, validation_alias="RATE_LIMIT_BORROW_REQUESTS_PER_WINDOW"
    )

    # OpenTelemetry
    otel_enabled: bool = Field(default=False, validation_alias="OTEL_ENABLED")
    otel_otlp_endpoint: str = Field(
        default="http://localhost:4318/v1/traces",
        validation_alias="OTEL_OTLP_ENDPOINT",
    )


settings = Settings()
