from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateKeyError,
    InvalidArgumentError,
    NotFoundError,
    ValidationError,
)
from .core.logging_config import setup_logging
from .employees.controller import register as register_employees
from .finance.controller import register as register_finance
from .leave.controller import register as register_leave
from .recruitment.controller import register as register_recruitment
from .seed import seed_demo_data

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (ValidationError, 400),
    (InvalidArgumentError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (DuplicateKeyError, 409),
)


def register_error_handlers(app: Flask) -> None:
    def _handler(status: int):
        def handle(error):
            return jsonify({"success": False, "error": str(error)}), status

        return handle

    for exc_type, status in ERROR_STATUS:
        app.register_error_handler(exc_type, _handler(status))

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({"success": False, "error": error.description}), error.code

    @app.errorhandler(Exception)
    def unexpected(error):
        logger.exception("Unhandled error: %s", error)
        return jsonify({"success": False, "error": "Internal server error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_PAGE_LIMIT"] = int(getattr(settings, "DEFAULT_PAGE_LIMIT", 10))
    app.config["MAX_PAGE_LIMIT"] = int(getattr(settings, "MAX_PAGE_LIMIT", 100))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.info("hr-suite starting with settings=%s", settings_module)

    if container is None:
        container = build_container(default_currency=getattr(settings, "DEFAULT_CURRENCY", "SGD"))
        if bool(getattr(settings, "SEED_DEMO_DATA", False)):
            seed_demo_data(container)
    app.extensions["hr_suite"] = container

    register_error_handlers(app)
    register_recruitment(app, container)
    register_employees(app, container)
    register_leave(app, container)
    register_finance(app, container)

    return app
