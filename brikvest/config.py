# Environment-aware configuration for the Brikvest backend

import logging
import os
from typing import Literal

logger = logging.getLogger(__name__)

# Environment detection
ENV: Literal["dev", "staging", "prod"] = os.environ.get("ENV", "dev")  # type: ignore
IS_DEV = (ENV == "dev")
IS_STAGING = (ENV == "staging")
IS_PROD = (ENV == "prod")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG" if IS_DEV else "INFO").upper()

# Database configuration
# DATABASE_URL takes precedence (managed Postgres in staging/prod)
# Falls back to SQLite for local development
DATABASE_URL = os.environ.get("DATABASE_URL", "").strip() or "sqlite:///./brikvest.db"
if DATABASE_URL.startswith("postgres://"):
    # SQLAlchemy only accepts the postgresql:// scheme
    DATABASE_URL = "postgresql://" + DATABASE_URL[len("postgres://"):]

IS_POSTGRES = DATABASE_URL.startswith("postgresql")
IS_SQLITE = DATABASE_URL.startswith("sqlite")

# Admin sessions live in Redis when configured, otherwise in process memory
REDIS_URL = os.environ.get("REDIS_URL", "").strip()
ADMIN_SESSION_HOURS = int(os.environ.get("ADMIN_SESSION_HOURS", "24"))

# Investment groups
GROUP_EXPIRY_DAYS = int(os.environ.get("GROUP_EXPIRY_DAYS", "30"))
INVITE_CODE_LENGTH = int(os.environ.get("INVITE_CODE_LENGTH", "6"))
INVITE_CODE_ATTEMPTS = 10

# CORS origins (expand for staging/prod)
CORS_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
]

if IS_STAGING:
    staging_url = os.environ.get("CORS_ORIGINS", "")
    if staging_url:
        CORS_ORIGINS.extend(staging_url.split(","))
    else:
        CORS_ORIGINS.append("https://staging.brikvest.com")

if IS_PROD:
    prod_origins = os.environ.get("CORS_ORIGINS", "")
    if prod_origins:
        CORS_ORIGINS.extend(prod_origins.split(","))
    else:
        CORS_ORIGINS.append("https://brikvest.com")

# Outbound email: "smtp", "sendgrid" or "" (disabled)
EMAIL_PROVIDER = os.environ.get("EMAIL_PROVIDER", "").strip().lower()
MAIL_FROM = os.environ.get("MAIL_FROM", "Brikvest <info@brikvest.com>")
SMTP_HOST = os.environ.get("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))
SMTP_USERNAME = os.environ.get("SMTP_USERNAME", "")
SMTP_PASSWORD = os.environ.get("SMTP_PASSWORD", "")
SENDGRID_API_KEY = os.environ.get("SENDGRID_API_KEY", "")
MAIL_TIMEOUT_SECONDS = 10

# Uploads
UPLOAD_DIR = os.environ.get("UPLOAD_DIR", "uploads")
PUBLIC_UPLOAD_URL = os.environ.get("PUBLIC_UPLOAD_URL", "/uploads").rstrip("/")
MAX_UPLOAD_MB = int(os.environ.get("MAX_UPLOAD_MB", "10"))


def log_settings() -> None:
    """Log the effective configuration (no secrets)."""
    logger.info("[CONFIG] Environment: %s", ENV)
    logger.info("[CONFIG] Database: %s", "PostgreSQL" if IS_POSTGRES else "SQLite (local dev)")
    logger.info("[CONFIG] Session store: %s", "Redis" if REDIS_URL else "in-process memory")
    logger.info("[CONFIG] Admin session: %s hours", ADMIN_SESSION_HOURS)
    logger.info("[CONFIG] Email provider: %s", EMAIL_PROVIDER or "disabled")
