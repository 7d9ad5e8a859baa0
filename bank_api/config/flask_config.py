from flask import Flask

from bank_api.config.settings import settings


def configure_app(app: Flask) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    # keep response keys in schema order
    app.json.sort_keys = False
