"""Flask application factory."""

from __future__ import annotations

from importlib import import_module

from flask import Flask

from tubehub.core.config import BaseConfig, get_config
from tubehub.core.logger import configure_logging

# Initialisation order: ProxyFix must wrap the WSGI app before anything reads
# the request scheme, and the error boundary goes last so it sees every
# blueprint.
_INIT_STEPS = (
    "tubehub.core.proxy",
    "tubehub.core.extensions",
    "tubehub.core.logger",
    "tubehub.core.cors",
    "tubehub.api",
    "tubehub.core.errors",
)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build the tubehub API application.

    :param config: Config object or import path; ``APP_ENV`` decides when ``None``.
    :param instance_relative_config: Look for overrides in the instance folder.
    :param instance_config_filename: Optional instance override file.
    :returns: Configured Flask app with database, token and media adapters
        registered under ``app.extensions``.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    for module in _INIT_STEPS:
        import_module(module).init_app(app)

    @app.shell_context_processor
    def _shell_context():
        from tubehub.core.extensions import db
        from tubehub.models import Subscription, User, Video, WatchHistoryEntry

        return {
            "db": db,
            "User": User,
            "Video": Video,
            "Subscription": Subscription,
            "WatchHistoryEntry": WatchHistoryEntry,
        }

    return app
