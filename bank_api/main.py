# bank_api/main.py
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from bank_api.api.middlewares.error_handler import register_error_handlers
from bank_api.api.routes import register_routes
from bank_api.config.flask_config import configure_app
from bank_api.config.logging_config import setup_logging
from bank_api.config.settings import settings
from bank_api.infrastructure.database.init_db import init_db

import bank_api.infrastructure.database.models.user_model  # noqa: F401


def create_app() -> Flask:
    setup_logging(settings.log_level)

    app = Flask(__name__)

    CORS(
        app,
        resources={rf"{settings.api_prefix}/*": {"origins": settings.cors_origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "HEAD", "POST", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app)
    register_routes(app, api_prefix=settings.api_prefix)
    register_error_handlers(app)

    if settings.init_database:
        init_db(seed=settings.seed_database)

    return app


app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=settings.debug)
