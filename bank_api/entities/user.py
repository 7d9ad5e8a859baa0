# bank_api/entities/user.py
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class User:
    """Outward view of a user account. Never carries the password hash."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str]
    account_number: str
    balance: Decimal
    created_at: datetime
    updated_at: Optional[datetime]
    is_active: bool

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class NewUser:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = None
    initial_balance: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class UserChanges:
    """Partial update. ``None`` means "leave unchanged"."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: Optional[bool] = None

    def provided_fields(self) -> list[str]:
        return [name for name, value in self.__dict__.items() if value is not None]
