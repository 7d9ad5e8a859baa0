# bank_api/api/routes/__init__.py

from flask import Flask

from bank_api.api.routes.auth_routes import bp_auth
from bank_api.api.routes.health_routes import bp_health
from bank_api.api.routes.user_routes import bp_users


def register_routes(app: Flask, *, api_prefix: str) -> None:
    # health stays outside the versioned API
    app.register_blueprint(bp_health, url_prefix=f"{api_prefix}/health")

    app.register_blueprint(bp_auth, url_prefix=f"{api_prefix}/v<int:version>/auth")
    app.register_blueprint(bp_users, url_prefix=f"{api_prefix}/v<int:version>/users")
