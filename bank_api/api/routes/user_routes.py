# bank_api/api/routes/user_routes.py

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, g, jsonify, request

from bank_api.api.middlewares.api_version import install_version_guard, require_api_version
from bank_api.api.middlewares.auth_middleware import current_user_id, require_auth
from bank_api.api.middlewares.request_body import json_object
from bank_api.api.schemas.user_schema import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    UserSummaryMetadata,
    UserSummaryResponse,
)
from bank_api.core.exceptions import (
    AppError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from bank_api.infrastructure.database.session import db_session
from bank_api.repositories.user_repository import UserRepository
from bank_api.services.user_service import UserService
from bank_api.validators.create_user_validator import CreateUserValidator
from bank_api.validators.parameter_validator import ParameterValidator
from bank_api.validators.update_user_validator import UpdateUserValidator
from bank_api.validators.validation_result import ValidationErrorKind, ValidationResult

bp_users = Blueprint("users", __name__)
install_version_guard(bp_users)

SUMMARY_FEATURES = ["Enhanced User Data", "Metadata Support", "Account Analytics"]


# -------------------------
# Helpers
# -------------------------

def _build_service(session) -> UserService:
    return UserService(UserRepository(session))


def _raise_for(result: ValidationResult) -> None:
    if result.is_valid:
        return
    if result.kind == ValidationErrorKind.NOT_FOUND:
        raise NotFoundError(result.first_error())
    if result.kind == ValidationErrorKind.CONFLICT:
        raise ConflictError(result.first_error())
    raise ValidationFailedError(result.errors)


def _check_user_id(user_id: int) -> None:
    result = ParameterValidator.validate_user_id(user_id)
    if not result.is_valid:
        raise AppError(result.first_error(), status_code=400)


# -------------------------
# Routes (all require a bearer token)
# -------------------------

@bp_users.get("")
@require_auth
def list_users():
    with db_session() as session:
        users = _build_service(session).get_all_users()

    return jsonify([UserResponse.from_user(u).to_json() for u in users]), 200


@bp_users.get("/<int:user_id>")
@require_auth
def get_user(user_id: int):
    """
    GET: a caller may only read their own record.
    HEAD: existence probe, any authenticated caller.
    """
    if request.method == "HEAD":
        with db_session() as session:
            exists = _build_service(session).user_exists(user_id)
        return ("", 200) if exists else ("", 404)

    _check_user_id(user_id)
    if current_user_id() != user_id:
        raise ForbiddenError("You can only access your own user details.")

    with db_session() as session:
        user = _build_service(session).get_user_by_id(user_id)

    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found.")

    return jsonify(UserResponse.from_user(user).to_json()), 200


@bp_users.get("/by-email")
@require_auth
def get_user_by_email():
    email = request.args.get("email")
    result = ParameterValidator.validate_email_parameter(email)
    if not result.is_valid:
        raise AppError(result.first_error(), status_code=400)

    with db_session() as session:
        user = _build_service(session).get_user_by_email(email)

    if user is None:
        raise NotFoundError(f"User with email {email} not found.")

    return jsonify(UserResponse.from_user(user).to_json()), 200


@bp_users.post("")
@require_auth
def create_user():
    payload = CreateUserRequest.model_validate(json_object())
    new_user = payload.to_new_user()

    with db_session() as session:
        service = _build_service(session)
        _raise_for(CreateUserValidator(service).validate_with_store(new_user))
        created = service.create_user(new_user)

    return jsonify(UserResponse.from_user(created).to_json()), 201


@bp_users.patch("/<int:user_id>")
@require_auth
def update_user(user_id: int):
    _check_user_id(user_id)
    payload = UpdateUserRequest.model_validate(json_object())
    changes = payload.to_changes()

    with db_session() as session:
        service = _build_service(session)
        _raise_for(UpdateUserValidator(service).validate_with_store((user_id, changes)))
        updated = service.update_user(user_id, changes)

    if updated is None:
        raise NotFoundError(f"User with ID {user_id} not found.")

    return jsonify(UserResponse.from_user(updated).to_json()), 200


@bp_users.delete("/<int:user_id>")
@require_auth
def delete_user(user_id: int):
    with db_session() as session:
        service = _build_service(session)
        # inactive rows count as missing, so a second delete is a 404
        if not service.user_exists(user_id) or not service.delete_user(user_id):
            raise NotFoundError(f"User with ID {user_id} not found.")

    return ("", 204)


@bp_users.get("/<int:user_id>/summary")
@require_api_version(2)
@require_auth
def get_user_summary(user_id: int):
    with db_session() as session:
        user = _build_service(session).get_user_by_id(user_id)

    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found.")

    now = datetime.now(tz=timezone.utc)
    created_at = user.created_at.replace(tzinfo=timezone.utc)
    summary = UserSummaryResponse(
        user=UserResponse.from_user(user),
        metadata=UserSummaryMetadata(
            account_age_days=(now - created_at).days,
            api_version=f"{g.api_version}.0",
            last_accessed=now,
            features=SUMMARY_FEATURES,
        ),
    )
    return jsonify(summary.to_json()), 200
