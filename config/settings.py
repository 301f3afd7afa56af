"""
Application settings loaded from environment variables.
"""

from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings

from utils.errors import ConfigurationError

_DEFAULT_TRUSTED_PROXIES = [
    "127.0.0.1",
    "::1",
    "10.0.0.0/8",
    "172.16.0.0/12",
    "192.168.0.0/16",
]


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = ""              # full URL wins over the db_* parts
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "password"
    db_name: str = "mobile_shop"

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = ""                # HMAC secret for session tokens
    jwt_expiry_seconds: int = 86400     # 24 hours
    bcrypt_rounds: int = 10

    # ── Upstream catalog ─────────────────────────────────────────────────
    catalog_base_url: str = "https://dummyjson.com"
    catalog_timeout_seconds: float = 10.0

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 8080
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:5174",
    ]
    trusted_proxies: str = ""           # comma-separated hosts / networks

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("database_url", "jwt_secret", "trusted_proxies")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    def resolved_database_url(self) -> str:
        """Return the full database URL, composing it from parts when unset."""
        if self.database_url:
            url = self.database_url
            # Plain postgres URLs (as handed out by hosting providers) need the
            # async driver spelled out for SQLAlchemy.
            for prefix in ("postgres://", "postgresql://"):
                if url.startswith(prefix):
                    return "postgresql+asyncpg://" + url[len(prefix):]
            return url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    def trusted_proxy_list(self) -> List[str]:
        if not self.trusted_proxies:
            return list(_DEFAULT_TRUSTED_PROXIES)
        return [p.strip() for p in self.trusted_proxies.split(",") if p.strip()]

    def validate_for_startup(self) -> None:
        """Refuse to boot with settings that would make the server unsafe."""
        if not self.jwt_secret:
            raise ConfigurationError(
                "JWT_SECRET is not set. Add it to your environment or .env file."
            )
        if self.jwt_expiry_seconds <= 0:
            raise ConfigurationError("JWT_EXPIRY_SECONDS must be positive.")
