# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRETS = ("dev", "development", "test", "")
# PyJWT warns about HS256 keys shorter than the 32-byte digest
_MIN_SECRET_LENGTH = 32


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///loginlab.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", validate_by_name=True, extra="ignore"
    )


class AuthConfig(BaseSettings):
    # Token signing key, fixed for the process lifetime
    jwt_secret: str = Field("dev", alias="JWT_SECRET")
    jwt_ttl_seconds: int = Field(3600, ge=1, alias="JWT_TTL_SECONDS")

    cookie_ttl_seconds: int = Field(3600, ge=1, alias="COOKIE_TTL_SECONDS")
    session_ttl_seconds: int = Field(1800, ge=1, alias="SESSION_TTL_SECONDS")

    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: Literal["Lax", "Strict", "None"] = Field("Lax", alias="COOKIE_SAMESITE")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", validate_by_name=True, extra="ignore"
    )


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    seed_demo_users: bool = Field(True, alias="SEED_DEMO_USERS")
    log_file: Path = Field(Path("instance/loginlab.log"), alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", "seed_demo_users", mode="before")
    @classmethod
    def _blank_flag_is_false(cls, value: str | bool) -> str | bool:
        # SEED_DEMO_USERS= in a .env file switches seeding off
        if isinstance(value, str) and not value.strip():
            return False
        return value

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        weak = [
            name
            for name, value in (("SECRET_KEY", self.secret_key), ("JWT_SECRET", self.auth.jwt_secret))
            if value in _INSECURE_SECRETS or len(value) < _MIN_SECRET_LENGTH
        ]
        if weak:
            print(
                f"\n❌ refusing to start in production: weak {', '.join(weak)}\n"
                f"   use at least {_MIN_SECRET_LENGTH} random characters, e.g. secrets.token_urlsafe(32)\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if not self.auth.cookie_secure:
            print(
                "\n⚠️  PRODUCTION SECURITY WARNING: COOKIE_SECURE is off, login cookies will travel over plain HTTP\n",
                file=sys.stderr,
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "load_config"]
