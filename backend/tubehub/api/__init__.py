"""HTTP surface: versioned blueprints mounted below ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def _join(*segments: str | None) -> str:
    return "/" + "/".join(s.strip("/") for s in segments if s and s.strip("/"))


def mount_version(app: Flask, *, version: str, blueprints: Iterable[Blueprint]) -> None:
    """Register ``blueprints`` under ``<API_BASE_PREFIX>/<version>``.

    Each blueprint keeps its own ``url_prefix`` below the version segment, so
    ``auth`` with ``/auth`` ends up at ``/api/v1/auth``. A blueprint without a
    prefix is mounted at the version root.
    """
    base = app.config.get("API_BASE_PREFIX", "/api")
    for bp in blueprints:
        app.register_blueprint(bp, url_prefix=_join(base, version, bp.url_prefix))


def init_app(app: Flask) -> None:
    """Register every API version on the app."""

    from tubehub.api.v1 import API_VERSION as V1
    from tubehub.api.v1 import BLUEPRINTS as V1_BLUEPRINTS

    mount_version(app, version=V1, blueprints=V1_BLUEPRINTS)


__all__ = ["init_app", "mount_version"]
