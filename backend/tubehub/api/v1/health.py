"""Liveness probe: database reachability plus the configured adapters."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from tubehub import __version__
from tubehub.api.deps import api_response, timing
from tubehub.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        database = "fail"

    cfg = current_app.config
    payload = {
        "db": database,
        "refreshTokenStore": str(cfg.get("REFRESH_TOKEN_STORE", "database")).lower(),
        "mediaBackend": str(cfg.get("MEDIA_BACKEND", "s3")).lower(),
        "version": cfg.get("APP_VERSION") or __version__,
    }
    return api_response(payload, message="ok")
