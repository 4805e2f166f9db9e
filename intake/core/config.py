# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration: all env-driven.
Single source of truth for every tunable parameter.
"""

import os


def _parse_api_keys(raw: str) -> dict[str, str]:
    """Parse ``key:role`` pairs. A bare key is treated as an admin key."""
    keys: dict[str, str] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" in pair:
            key, role = pair.split(":", 1)
            keys[key.strip()] = role.strip() or "admin"
        else:
            keys[pair] = "admin"
    return keys


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        self.SERVICE_NAME: str = os.getenv("SERVICE_NAME", "lead-intake")
        self.SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
        self.DEBUG: bool = _flag("DEBUG")
        self.COMPANY_NAME: str = os.getenv("COMPANY_NAME", "IITIAN CRAFT")

        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./intake.db")
        self.POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
        self.MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
        self.POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))

        self.SMTP_HOST: str = os.getenv("SMTP_HOST", "")
        self.SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
        self.SMTP_USER: str = os.getenv("SMTP_USER", "")
        self.SMTP_PASS: str = os.getenv("SMTP_PASS", "")
        self.SMTP_USE_TLS: bool = _flag("SMTP_USE_TLS", "true")
        self.EMAIL_FROM: str = os.getenv("EMAIL_FROM") or self.SMTP_USER
        # Staff inbox for admin notices; falls back to the sending account.
        self.ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL") or self.SMTP_USER

        self.NOTIFICATION_TIMEOUT: float = float(os.getenv("NOTIFICATION_TIMEOUT", "5.0"))
        self.NOTIFICATION_WORKERS: int = int(os.getenv("NOTIFICATION_WORKERS", "4"))

        self.API_KEYS: dict[str, str] = _parse_api_keys(os.getenv("API_KEYS", ""))

        self.DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
        self.MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

        self.CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
