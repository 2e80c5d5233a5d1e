"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import Any

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
redis_client: redis.Redis | None = None

# Keys under ``app.extensions`` holding the service adapters
TOKEN_PROVIDER_KEY = "tubehub.token_provider"
REFRESH_STORE_KEY = "tubehub.refresh_token_store"
MEDIA_STORE_KEY = "tubehub.media_store"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT, Redis and the service adapters.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`tubehub.models` package to ensure SQLAlchemy metadata is ready
        for migrations.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from tubehub import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    _init_redis(app)
    _init_adapters(app)


def _init_redis(app: Flask) -> None:
    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        app.extensions.pop("redis_client", None)
        return

    redis_client = redis.Redis.from_url(redis_url)
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions["redis_client"] = redis_client


def _init_adapters(app: Flask) -> None:
    """Build the token provider, refresh-token store and media store."""
    from tubehub.infra.jwt.jwt_token_provider import JWTTokenProvider
    from tubehub.infra.storage.s3_media_store import build_media_store

    app.extensions[TOKEN_PROVIDER_KEY] = JWTTokenProvider.from_config(app.config)
    app.extensions[REFRESH_STORE_KEY] = _build_refresh_store(app)
    app.extensions[MEDIA_STORE_KEY] = build_media_store(app.config)


def _build_refresh_store(app: Flask) -> Any:
    backend = str(app.config.get("REFRESH_TOKEN_STORE", "database")).strip().lower()
    if backend == "redis":
        from tubehub.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore

        return RedisRefreshTokenStore(r=get_redis(), ttl=app.config.get("REFRESH_TOKEN_EXPIRY"))
    if backend == "database":
        from tubehub.infra.db.sqlalchemy_refresh_token_store import (
            SQLAlchemyRefreshTokenStore,
        )

        return SQLAlchemyRefreshTokenStore()
    raise RuntimeError(f"Unknown REFRESH_TOKEN_STORE {backend!r}")


def get_redis() -> redis.Redis:
    """Return the initialized Redis client."""
    if redis_client is None:
        raise RuntimeError("Redis client is not initialized. Set REDIS_URL and call init_app().")
    return redis_client


def get_adapter(key: str) -> Any:
    """Return a service adapter registered on the current application."""
    try:
        return current_app.extensions[key]
    except KeyError as exc:
        raise RuntimeError(f"Adapter {key!r} is not initialized. Call init_app() first.") from exc
