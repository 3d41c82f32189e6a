# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import os

from flask import Flask
from flask_cors import CORS

from socialnet.container import Container
from socialnet.infrastructure.db import Database
from socialnet.shared.config import AppConfig, load_config
from socialnet.shared.logging import logger, setup_logging
from socialnet.shared.middleware.error_handler import configure_error_handling
from socialnet.shared.middleware.request_logger import configure_request_logging


def _configure_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")

        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp


def create_app(config: AppConfig | None = None, *, database: Database | None = None) -> Flask:
    """Build the API. The database is initialised here and disposed at exit."""

    config = config or load_config()
    setup_logging(debug=config.debug_logging, to_file=os.getenv("LOG_TO_FILE", "1") == "1")

    if database is None:
        database = Database(config.database).init()
        atexit.register(database.dispose)

    container = Container(config, database)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["socialnet"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}},
        "expose_headers": ["X-Request-ID"],
    }
    CORS(app, **cors_kwargs)
    _configure_security_headers(app, config)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())
    app.register_blueprint(container.posts_controller.as_blueprint())
    app.register_blueprint(container.profiles_controller.as_blueprint())

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


if __name__ == "__main__":
    create_app().run(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        debug=os.getenv("FLASK_DEBUG") == "1",
    )
