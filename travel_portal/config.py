import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

SECRET_KEY = os.getenv("SECRET_KEY", "travel-portal-secret-key")

# SQLite for now, can switch to PostgreSQL via DATABASE_URL
DEFAULT_DB = f"sqlite:///{os.path.join(BASE_DIR, 'travel_requests.db')}"

MB = 1024 * 1024


def _flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", DEFAULT_DB)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = SECRET_KEY

    # sqlalchemy / memory
    REQUEST_STORE = os.getenv("REQUEST_STORE", "sqlalchemy")

    # auto / inline / directory
    QUOTE_STORAGE = os.getenv("QUOTE_STORAGE", "auto")
    QUOTE_STORAGE_DIR = os.getenv("QUOTE_STORAGE_DIR") or None
    QUOTE_INLINE_MAX_BYTES = int(os.getenv("QUOTE_INLINE_MAX_BYTES", 18 * MB))
    QUOTE_MAX_BYTES = int(os.getenv("QUOTE_MAX_BYTES", 100 * MB))

    NOTIFICATIONS_ENABLED = _flag("NOTIFICATIONS_ENABLED", True)
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", 587))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_SENDER = os.getenv("MAIL_SENDER", "Travel Request Portal <noreply@travel-requests.local>")
    NOTIFY_EMAIL_TO = os.getenv("NOTIFY_EMAIL_TO")

    AIRPORTS_ENABLED = _flag("AIRPORTS_ENABLED", True)
    AIRPORTS_URL = os.getenv(
        "AIRPORTS_URL",
        "https://raw.githubusercontent.com/mwgg/Airports/master/airports.json",
    )
    AIRPORTS_RETRY_SECONDS = int(os.getenv("AIRPORTS_RETRY_SECONDS", 300))

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret"
    QUOTE_STORAGE = "inline"
    QUOTE_STORAGE_DIR = None
    NOTIFICATIONS_ENABLED = False
    AIRPORTS_ENABLED = False
