import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")

    # MySQL örneği: mysql+pymysql://root:@localhost/librarydb?charset=utf8mb4
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "SQLALCHEMY_DATABASE_URI",
        f"sqlite:///{BASE_DIR / 'tomenest.db'}"
    )

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # create_all | upgrade | none
    SCHEMA_STRATEGY = os.getenv("SCHEMA_STRATEGY", "create_all")
    MIGRATIONS_DIR = os.getenv("MIGRATIONS_DIR", str(BASE_DIR / "migrations"))
    SQLITE_BUSY_TIMEOUT_MS = int(os.getenv("SQLITE_BUSY_TIMEOUT_MS", "10000"))

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-super-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_ACCESS_TOKEN_HOURS", "12")))

    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "tomenest_session")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"

    OPENLIBRARY_BASE_URL = os.getenv("OPENLIBRARY_BASE_URL", "https://openlibrary.org")
    OPENLIBRARY_TIMEOUT = float(os.getenv("OPENLIBRARY_TIMEOUT", "10"))

    # virgülle ayrılmış origin listesi, "*" hepsine izin verir
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
