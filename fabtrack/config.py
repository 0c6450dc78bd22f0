import os
from datetime import timedelta


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "fabtrack-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///fabtrack.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "fabtrack-jwt-secret-change-me-in-production")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", "60")))

    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = _env_flag("MAIL_USE_TLS", "1")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "noreply@fabtrack.local")

    # comma separated; empty means every Admin user
    ADMIN_NOTIFY_EMAILS = os.getenv("ADMIN_NOTIFY_EMAILS", "")

    # 0 keeps re-sending on every sweep
    REMINDER_DEDUPE_HOURS = int(os.getenv("REMINDER_DEDUPE_HOURS", "0"))

    SCHEDULER_ENABLED = _env_flag("SCHEDULER_ENABLED", "0")
    REMINDER_HOUR_UTC = int(os.getenv("REMINDER_HOUR_UTC", "8"))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "fabtrack-test-jwt-secret-0123456789abcdef"
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = "fabtrack@test.local"
    ADMIN_NOTIFY_EMAILS = ""
    REMINDER_DEDUPE_HOURS = 0
    SCHEDULER_ENABLED = False
