"""Flask application factory for the WellBite API."""

from __future__ import annotations

import logging

from flask import Flask

from wellbite.core.config import BaseConfig, get_config

log = logging.getLogger(__name__)


def _load_config(app: Flask, config: str | type[BaseConfig] | object | None) -> None:
    # An instance/config.py may override secrets on a deployed host
    app.config.from_object(get_config() if config is None else config)
    app.config.from_pyfile("config.py", silent=True)


def create_app(config: str | type[BaseConfig] | object | None = None) -> Flask:
    """
    Build the application.

    Order matters: logging first so extension setup is logged as JSON, the
    database before the auth wiring that reads from it, and error handlers
    last so they cover every blueprint.

    :param config: Config class, object or import path. ``None`` selects the
        class named by ``APP_ENV``.
    """
    app = Flask(__name__, instance_relative_config=True)
    _load_config(app, config)

    from wellbite.core import errors, extensions, logger

    logger.configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    logger.init_app(app)
    extensions.init_app(app)

    from wellbite import api

    api.init_app(app)
    errors.init_app(app)

    log.info(
        "WellBite API ready (env=%s, access-token denylist=%s)",
        "testing" if app.testing else ("debug" if app.debug else "production"),
        app.config.get("ACCESS_TOKEN_DENYLIST") or "off",
    )
    return app
