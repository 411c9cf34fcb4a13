# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from loginlab.infrastructure.container import Container
from loginlab.infrastructure.seed_data import seed_demo_users
from loginlab.interfaces.http.controllers.misc_controller import MiscController
from loginlab.shared.logging import logger, setup_logging
from loginlab.shared.middleware.error_handler import configure_error_handling
from loginlab.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config

    setup_logging("DEBUG" if config.debug_logging else None, log_file=config.log_file)

    if container.uses_database:
        from loginlab.infrastructure.db import init_db

        init_db()
    if config.seed_demo_users:
        seed_demo_users(container.user_repository, container.password_hasher)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    configure_error_handling(app, verbose=config.debug_logging)
    configure_request_logging(app, verbose=config.debug_logging)

    app.register_blueprint(MiscController().as_blueprint())
    for controller in container.login_controllers:
        app.register_blueprint(controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp

    app.extensions["loginlab.container"] = container
    logger.info("Flask app initialized")
    return app


def main() -> None:
    create_app().run(host="127.0.0.1", port=5000)


if __name__ == "__main__":
    main()
