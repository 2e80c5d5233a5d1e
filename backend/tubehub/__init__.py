"""tubehub: account, session-token and channel backend for a video platform.

``from tubehub import create_app`` is the WSGI entry point used by gunicorn.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .factory import create_app  # noqa: E402

__all__ = ["__version__", "create_app"]
