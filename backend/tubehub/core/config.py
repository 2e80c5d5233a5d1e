"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

_DURATION_RE: Final = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


# Load .env in development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_duration(raw: str) -> timedelta:
    """Parse a compact duration such as ``"15m"``, ``"10d"`` or ``"3600"``.

    Parameters
    ----------
    raw: str
        Integer amount followed by an optional unit (``s``, ``m``, ``h``,
        ``d``). A bare number is read as seconds.

    Returns
    -------
    datetime.timedelta
        Parsed lifetime.

    Raises
    ------
    ValueError
        If the value does not match the accepted format.
    """
    match = _DURATION_RE.match(raw or "")
    if match is None:
        raise ValueError(f"Invalid duration: {raw!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


def env_duration(name: str, default: str) -> timedelta:
    """Read a duration from the environment using :func:`parse_duration`."""
    return parse_duration(os.getenv(name, default))


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret. Defaults to a development-safe placeholder and should be
        overridden in production.
    ACCESS_TOKEN_SECRET / REFRESH_TOKEN_SECRET: str
        Independent signing keys for the two token kinds.
    ACCESS_TOKEN_EXPIRY / REFRESH_TOKEN_EXPIRY: timedelta
        Independent lifetimes for the two token kinds.
    JWT_SECRET_KEY: str
        Mirrors ``ACCESS_TOKEN_SECRET`` so ``flask-jwt-extended`` can verify
        access tokens on protected routes.
    REFRESH_TOKEN_STORE: str
        ``"database"`` keeps the current refresh token on the user row;
        ``"redis"`` keeps it in Redis (requires ``REDIS_URL``).
    MEDIA_BACKEND: str
        ``"s3"`` for any S3-compatible host, ``"memory"`` for local runs.
    MEDIA_CLEANUP_ON_REPLACE: bool
        Delete the previous remote asset after an avatar or cover image swap.
    AUTH_COOKIE_SECURE / AUTH_COOKIE_SAMESITE:
        Attributes applied to the ``accessToken`` and ``refreshToken`` cookies.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    DB_READ_ISOLATION_LEVEL: str | None
        Isolation level for read-only units of work; unset leaves the
        driver default in place.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    ACCESS_TOKEN_EXPIRY = env_duration("ACCESS_TOKEN_EXPIRY", "15m")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    REFRESH_TOKEN_EXPIRY = env_duration("REFRESH_TOKEN_EXPIRY", "10d")

    # flask-jwt-extended (request-time verification of access tokens only)
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    JWT_TOKEN_LOCATION = ["cookies", "headers"]
    JWT_ACCESS_COOKIE_NAME = "accessToken"
    JWT_COOKIE_CSRF_PROTECT = False

    # Session cookies
    AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", True)
    AUTH_COOKIE_SAMESITE = os.getenv("AUTH_COOKIE_SAMESITE", "Strict")

    # Refresh-session storage
    REFRESH_TOKEN_STORE = os.getenv("REFRESH_TOKEN_STORE", "database")
    REDIS_URL = os.getenv("REDIS_URL")

    # Media host
    MEDIA_BACKEND = os.getenv("MEDIA_BACKEND", "s3")
    MEDIA_KEY_PREFIX = os.getenv("MEDIA_KEY_PREFIX", "media")
    MEDIA_PUBLIC_BASE_URL = os.getenv("MEDIA_PUBLIC_BASE_URL")
    MEDIA_CLEANUP_ON_REPLACE = env_bool("MEDIA_CLEANUP_ON_REPLACE", True)
    S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL")
    S3_ACCESS_KEY_ID = os.getenv("S3_ACCESS_KEY_ID")
    S3_SECRET_ACCESS_KEY = os.getenv("S3_SECRET_ACCESS_KEY")
    S3_BUCKET_NAME = os.getenv("S3_BUCKET_NAME", "tubehub")
    S3_REGION = os.getenv("S3_REGION", "us-east-1")

    # Uploads (avatar / cover image)
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    DB_READ_ISOLATION_LEVEL = os.getenv("DB_READ_ISOLATION_LEVEL") or None

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = int(os.getenv("PROXYFIX_HOPS", "1"))

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default, keeps uploads in memory unless an S3
    endpoint is configured, and relaxes the ``Secure`` cookie flag so the
    API can be exercised over plain HTTP.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    MEDIA_BACKEND = os.getenv("MEDIA_BACKEND", "memory")
    AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Keeps media and refresh sessions local (memory / database).
    - Propagates exceptions so pytest can surface tracebacks directly.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    DB_READ_ISOLATION_LEVEL = None
    ACCESS_TOKEN_SECRET = "test-access-secret-0123456789abcdef"
    REFRESH_TOKEN_SECRET = "test-refresh-secret-0123456789abcdef"
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    REFRESH_TOKEN_STORE = "database"
    REDIS_URL = None
    MEDIA_BACKEND = "memory"
    MEDIA_PUBLIC_BASE_URL = "https://media.test"
    MEDIA_CLEANUP_ON_REPLACE = True
    AUTH_COOKIE_SECURE = False
    USE_PROXYFIX = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
