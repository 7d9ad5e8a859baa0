# bank_api/api/routes/auth_routes.py

from flask import Blueprint, jsonify

from bank_api.api.middlewares.api_version import install_version_guard
from bank_api.api.middlewares.auth_middleware import current_user_id, require_auth
from bank_api.api.middlewares.request_body import json_object
from bank_api.api.schemas.auth_schema import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from bank_api.api.schemas.user_schema import UserResponse
from bank_api.core.exceptions import ConflictError, NotFoundError, UnauthorizedError, ValidationFailedError
from bank_api.infrastructure.database.session import db_session
from bank_api.infrastructure.security.jwt_provider import JwtProvider
from bank_api.repositories.user_repository import UserRepository
from bank_api.services.auth_service import AuthResult, AuthService
from bank_api.services.user_service import UserService
from bank_api.validators.create_user_validator import CreateUserValidator
from bank_api.validators.validation_result import ValidationErrorKind

bp_auth = Blueprint("auth", __name__)
install_version_guard(bp_auth)


# -------------------------
# Helpers
# -------------------------

def _build_service(session) -> AuthService:
    return AuthService(
        user_service=UserService(UserRepository(session)),
        jwt_provider=JwtProvider(),
    )


def _auth_response(result: AuthResult) -> dict:
    return AuthResponse(
        token=result.token,
        expires_at=result.expires_at,
        user=UserResponse.from_user(result.user),
    ).to_json()


# -------------------------
# Routes
# -------------------------

@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(json_object())

    with db_session() as session:
        result = _build_service(session).login(email=payload.email, password=payload.password)

    if result is None:
        raise UnauthorizedError("Invalid email or password.")

    return jsonify(_auth_response(result)), 200


@bp_auth.post("/register")
def register():
    payload = RegisterRequest.model_validate(json_object())
    new_user = payload.to_new_user()

    with db_session() as session:
        user_service = UserService(UserRepository(session))
        validation = CreateUserValidator(user_service).validate_with_store(new_user)
        if validation.kind == ValidationErrorKind.CONFLICT:
            raise ConflictError("User with this email already exists.")
        if not validation.is_valid:
            raise ValidationFailedError(validation.errors)

        result = _build_service(session).register(new_user)
        if result is None:
            raise ConflictError("User with this email already exists.")

    return jsonify(_auth_response(result)), 201


@bp_auth.post("/change-password")
@require_auth
def change_password():
    payload = ChangePasswordRequest.model_validate(json_object())
    user_id = current_user_id()

    with db_session() as session:
        changed = _build_service(session).change_password(
            user_id=user_id,
            current_password=payload.current_password,
            new_password=payload.new_password,
        )

    if not changed:
        raise ValidationFailedError(
            ["Invalid current password or user not found."],
            message="Password change failed",
        )

    return jsonify(MessageResponse(message="Password changed successfully.").to_json()), 200


@bp_auth.get("/me")
@require_auth
def me():
    user_id = current_user_id()

    with db_session() as session:
        user = _build_service(session).get_current_user(user_id)

    if user is None:
        raise NotFoundError("User not found.")

    return jsonify(UserResponse.from_user(user).to_json()), 200


@bp_auth.post("/logout")
@require_auth
def logout():
    # tokens are stateless; the client discards its copy
    return jsonify(
        MessageResponse(
            message="Logged out successfully. Please remove the token from client storage."
        ).to_json()
    ), 200
