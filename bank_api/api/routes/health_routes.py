# bank_api/api/routes/health_routes.py
import logging

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bank_api.config.settings import settings
from bank_api.infrastructure.database.session import db_session

logger = logging.getLogger(__name__)

bp_health = Blueprint("health", __name__)


@bp_health.get("")
def health():
    """Liveness; lists the API versions this build serves."""
    return jsonify(
        {
            "status": "ok",
            "service": settings.jwt_issuer,
            "supportedVersions": settings.supported_api_versions,
        }
    ), 200


@bp_health.get("/db")
def health_db():
    try:
        with db_session() as session:
            session.execute(text("select 1"))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return jsonify({"status": "unavailable", "db": "error"}), 503
    return jsonify({"status": "ok", "db": "ok"}), 200
