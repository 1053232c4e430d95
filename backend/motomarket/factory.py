"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from motomarket.core.config import BaseConfig, get_config
from motomarket.core.logger import configure_logging
from motomarket.core.logger import init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    Raises
    ------
    motomarket.services._shared.errors.ConfigurationError
        When the token signing secret (``JWT_SECRET``) is missing.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    if config is None or isinstance(config, str):
        config = get_config(config)
    app.config.from_object(config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from motomarket.core import proxy

    proxy.init_app(app)

    from motomarket.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from motomarket.core import cors

    cors.init_app(app)

    from motomarket.api import init_app as init_api

    init_api(app)

    from motomarket.core import errors

    errors.init_app(app)

    return app
