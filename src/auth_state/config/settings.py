"""Auth state service configuration using pydantic-settings"""

from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Identity Provider
    identity_provider: Literal["fm-auth-service", "memory"] = Field(
        default="fm-auth-service",
        description="Identity provider backing sign-in, sign-up and sign-out",
    )
    fm_auth_service_url: str = Field(
        default="http://127.0.0.1:8001",
        description="Base URL of fm-auth-service",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Per-request timeout for identity provider calls, in seconds",
    )

    # Persisted session flag (Redis connection comes from REDIS_* variables)
    persist_flag: bool = Field(
        default=True,
        description="Write the best-effort 'authenticated' flag on sign-in",
    )
    flag_key_prefix: str = Field(
        default="auth_state",
        description="Key namespace for the persisted flag",
    )

    # Service Configuration
    service_host: str = Field(
        default="127.0.0.1",
        description="Service bind host (loopback: the HTTP surface is single-user)",
    )
    service_port: int = Field(
        default=8090,
        description="Service bind port",
    )

    # CORS Configuration
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Singleton settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
