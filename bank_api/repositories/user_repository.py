# bank_api/repositories/user_repository.py

from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bank_api.core.base_repository import BaseRepository
from bank_api.core.exceptions import DuplicateAccountNumberError, DuplicateEmailError
from bank_api.infrastructure.database.models.user_model import UserModel

# Columns copied by update(); id, account_number and created_at are immutable
_MUTABLE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "password_hash",
    "phone_number",
    "balance",
    "updated_at",
    "is_active",
)


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


class UserRepository(BaseRepository[UserModel]):
    """
    Store access for users. Lookups return ``None``/``False`` for missing
    rows; only unique index violations raise.
    """

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_all_active(self) -> list[UserModel]:
        stmt = select(UserModel).where(UserModel.is_active.is_(True)).order_by(UserModel.id)
        return list(self._session.execute(stmt).scalars().all())

    # any status: used to resolve update targets
    def get_by_id(self, user_id: int) -> UserModel | None:
        return self._session.get(UserModel, user_id)

    def get_active_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id, UserModel.is_active.is_(True))
        return self._session.execute(stmt).scalar_one_or_none()

    def get_active_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(
            func.lower(UserModel.email) == email.strip().lower(),
            UserModel.is_active.is_(True),
        )
        return self._session.execute(stmt).scalars().first()

    def create(self, model: UserModel) -> UserModel:
        email, account_number = model.email, model.account_number
        try:
            with self._savepoint() as session:
                session.add(model)
        except IntegrityError as e:
            raise self._duplicate_error(email, account_number, exclude_id=None) from e
        return model

    def update(self, model: UserModel) -> UserModel | None:
        existing = self._session.get(UserModel, model.id)
        if existing is None:
            return None

        values = {name: getattr(model, name) for name in _MUTABLE_FIELDS}
        try:
            with self._savepoint():
                for name, value in values.items():
                    setattr(existing, name, value)
        except IntegrityError as e:
            raise self._duplicate_error(
                values["email"], existing.account_number, exclude_id=existing.id
            ) from e
        return existing

    def soft_delete(self, user_id: int) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(is_active=False, updated_at=_utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    def exists(self, user_id: int) -> bool:
        stmt = select(UserModel.id).where(UserModel.id == user_id, UserModel.is_active.is_(True))
        return self._session.execute(stmt).first() is not None

    def email_exists(self, email: str) -> bool:
        stmt = select(UserModel.id).where(
            func.lower(UserModel.email) == email.strip().lower(),
            UserModel.is_active.is_(True),
        )
        return self._session.execute(stmt).first() is not None

    # any status: a soft-deleted account keeps its number forever
    def account_number_exists(self, account_number: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.account_number == account_number)
        return self._session.execute(stmt).first() is not None

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.is_active.is_(True))
            .values(password_hash=password_hash, updated_at=_utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    def _email_taken(self, email: str, *, exclude_id: int | None) -> bool:
        stmt = select(UserModel.id).where(func.lower(UserModel.email) == email.strip().lower())
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != exclude_id)
        return self._session.execute(stmt).first() is not None

    def _duplicate_error(self, email: str, account_number: str, *, exclude_id: int | None):
        if self._email_taken(email, exclude_id=exclude_id):
            return DuplicateEmailError(email)
        return DuplicateAccountNumberError(account_number)
