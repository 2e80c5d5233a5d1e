"""Version 1 of the HTTP API."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

from .auth import bp as auth_bp  # noqa: E402
from .channels import bp as channels_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Mounted in this order; each blueprint carries its own url_prefix
BLUEPRINTS: list[Blueprint] = [health_bp, auth_bp, users_bp, channels_bp]
