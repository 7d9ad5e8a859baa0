# bank_api/services/user_service.py

import logging
import secrets
from datetime import datetime, timezone
from decimal import Decimal

from bank_api.config.settings import settings
from bank_api.core.exceptions import DuplicateAccountNumberError
from bank_api.entities.user import NewUser, User, UserChanges
from bank_api.infrastructure.database.models.user_model import UserModel
from bank_api.infrastructure.security.password_hasher import PasswordHasher
from bank_api.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_PREFIX = "ACC"
# insert attempts after the pre-check; only a concurrent writer can exhaust them
MAX_ACCOUNT_NUMBER_INSERTS = 5


def generate_account_number() -> str:
    return f"{ACCOUNT_NUMBER_PREFIX}{100000 + secrets.randbelow(900000)}"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def _provided(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def to_user(model: UserModel) -> User:
    return User(
        id=model.id,
        first_name=model.first_name,
        last_name=model.last_name,
        email=model.email,
        phone_number=model.phone_number,
        account_number=model.account_number,
        balance=Decimal(model.balance).quantize(Decimal("0.01")),
        created_at=model.created_at,
        updated_at=model.updated_at,
        is_active=bool(model.is_active),
    )


class UserService:
    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    # -------------------------
    # Reads (active users only)
    # -------------------------

    def get_all_users(self) -> list[User]:
        return [to_user(m) for m in self._user_repository.get_all_active()]

    def get_user_by_id(self, user_id: int) -> User | None:
        model = self._user_repository.get_active_by_id(user_id)
        return to_user(model) if model is not None else None

    def get_user_by_email(self, email: str) -> User | None:
        model = self._user_repository.get_active_by_email(email)
        return to_user(model) if model is not None else None

    # Entity access for AuthService, which needs the password hash
    def get_user_entity_by_id(self, user_id: int) -> UserModel | None:
        return self._user_repository.get_active_by_id(user_id)

    def get_user_entity_by_email(self, email: str) -> UserModel | None:
        return self._user_repository.get_active_by_email(email)

    def user_exists(self, user_id: int) -> bool:
        return self._user_repository.exists(user_id)

    def email_exists(self, email: str) -> bool:
        return self._user_repository.email_exists(email)

    # -------------------------
    # Writes
    # -------------------------

    def create_user(self, new_user: NewUser) -> User:
        # Admin-created users without a password share the placeholder hash input
        password = new_user.password or settings.default_user_password
        password_hash = PasswordHasher.hash_password(password)

        attempt = 0
        while True:
            attempt += 1
            model = UserModel(
                first_name=new_user.first_name.strip(),
                last_name=new_user.last_name.strip(),
                email=new_user.email.strip(),
                password_hash=password_hash,
                phone_number=new_user.phone_number if _provided(new_user.phone_number) else None,
                account_number=self._next_free_account_number(),
                balance=Decimal(new_user.initial_balance).quantize(Decimal("0.01")),
                created_at=_utcnow(),
                updated_at=None,
                is_active=True,
            )
            try:
                created = self._user_repository.create(model)
            except DuplicateAccountNumberError:
                # lost a race against a concurrent insert, draw again
                if attempt >= MAX_ACCOUNT_NUMBER_INSERTS:
                    raise
                logger.warning("Account number collision on insert (attempt %d)", attempt)
                continue

            logger.info(
                "User created",
                extra={"user_id": created.id, "action": "USER_CREATED"},
            )
            return to_user(created)

    def update_user(self, user_id: int, changes: UserChanges) -> User | None:
        current = self._user_repository.get_by_id(user_id)
        if current is None:
            return None

        candidate = UserModel(
            id=current.id,
            first_name=changes.first_name.strip() if _provided(changes.first_name) else current.first_name,
            last_name=changes.last_name.strip() if _provided(changes.last_name) else current.last_name,
            email=changes.email.strip() if _provided(changes.email) else current.email,
            password_hash=current.password_hash,
            phone_number=(
                changes.phone_number if _provided(changes.phone_number) else current.phone_number
            ),
            balance=current.balance,
            updated_at=_utcnow(),
            is_active=changes.is_active if changes.is_active is not None else current.is_active,
        )

        updated = self._user_repository.update(candidate)
        if updated is None:
            return None

        logger.info(
            "User updated (fields=%s)",
            ",".join(changes.provided_fields()),
            extra={"user_id": user_id, "action": "USER_UPDATED"},
        )
        return to_user(updated)

    def update_user_password(self, user_id: int, new_password: str) -> bool:
        password_hash = PasswordHasher.hash_password(new_password)
        return self._user_repository.update_password_hash(user_id, password_hash)

    def delete_user(self, user_id: int) -> bool:
        deleted = self._user_repository.soft_delete(user_id)
        if deleted:
            logger.info("User deactivated", extra={"user_id": user_id, "action": "USER_DELETED"})
        return deleted

    def _next_free_account_number(self) -> str:
        # best-effort pre-check; the unique index is authoritative
        account_number = generate_account_number()
        while self._user_repository.account_number_exists(account_number):
            account_number = generate_account_number()
        return account_number
