# bank_api/services/auth_service.py

import logging
from dataclasses import dataclass
from datetime import datetime

from bank_api.entities.user import NewUser, User
from bank_api.infrastructure.database.models.user_model import UserModel
from bank_api.infrastructure.security.jwt_provider import IssuedToken, JwtProvider
from bank_api.infrastructure.security.password_hasher import PasswordHasher
from bank_api.services.user_service import UserService, to_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    token: str
    expires_at: datetime
    user: User


class AuthService:
    """
    Credential checks and token issuance. Stateless: tokens are never stored,
    so logout is left to the client.
    """

    def __init__(self, *, user_service: UserService, jwt_provider: JwtProvider) -> None:
        self._user_service = user_service
        self._jwt = jwt_provider

    def login(self, *, email: str, password: str) -> AuthResult | None:
        user = self._user_service.get_user_entity_by_email(email)
        if user is None or not user.is_active:
            logger.info("Login failed: unknown email", extra={"action": "LOGIN_FAILED"})
            return None

        if not PasswordHasher.verify_password(password, user.password_hash):
            logger.info(
                "Login failed: wrong password",
                extra={"user_id": user.id, "action": "LOGIN_FAILED"},
            )
            return None

        issued = self.generate_token(user)
        logger.info("Login succeeded", extra={"user_id": user.id, "action": "LOGIN_SUCCESS"})
        return AuthResult(token=issued.token, expires_at=issued.expires_at, user=to_user(user))

    def register(self, new_user: NewUser) -> AuthResult | None:
        """Creates the account and logs it in. ``None`` when the email is taken."""
        if self._user_service.email_exists(new_user.email):
            return None

        created = self._user_service.create_user(new_user)
        entity = self._user_service.get_user_entity_by_id(created.id)
        issued = self.generate_token(entity)
        return AuthResult(token=issued.token, expires_at=issued.expires_at, user=created)

    def change_password(self, *, user_id: int, current_password: str, new_password: str) -> bool:
        user = self._user_service.get_user_entity_by_id(user_id)
        if user is None or not user.is_active:
            return False

        if not PasswordHasher.verify_password(current_password, user.password_hash):
            logger.info(
                "Password change rejected: wrong current password",
                extra={"user_id": user_id, "action": "PASSWORD_CHANGE_FAILED"},
            )
            return False

        changed = self._user_service.update_user_password(user_id, new_password)
        if changed:
            logger.info("Password changed", extra={"user_id": user_id, "action": "PASSWORD_CHANGED"})
        return changed

    def get_current_user(self, user_id: int) -> User | None:
        return self._user_service.get_user_by_id(user_id)

    def generate_token(self, user: UserModel) -> IssuedToken:
        return self._jwt.issue_token(
            subject=str(user.id),
            payload={
                "email": user.email,
                "name": user.full_name,
                "account_number": user.account_number,
                "balance": f"{user.balance:.2f}",
            },
        )
