# bank_api/api/schemas/user_schema.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from bank_api.api.schemas._datetime_serializer import serialize_dt
from bank_api.entities.user import NewUser, User, UserChanges


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses the snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# -------------------------
# Requests
# -------------------------

# Field rules live in the validators, so every field stays optional here and
# a missing name is reported as a validation error, not a parse error.
class CreateUserRequest(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, max_length=200)
    phone_number: Optional[str] = None
    initial_balance: Decimal = Decimal("0.00")

    def to_new_user(self) -> NewUser:
        return NewUser(**self.model_dump())


class UpdateUserRequest(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: Optional[bool] = None

    def to_changes(self) -> UserChanges:
        return UserChanges(**self.model_dump())


# -------------------------
# Responses
# -------------------------

class UserResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: Optional[str] = None
    account_number: str
    balance: Decimal
    created_at: datetime
    updated_at: Optional[datetime] = None
    is_active: bool

    @field_serializer("created_at", "updated_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)

    @field_serializer("balance")
    def serialize_balance(self, value: Decimal) -> float:
        return float(value.quantize(Decimal("0.01")))

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            email=user.email,
            phone_number=user.phone_number,
            account_number=user.account_number,
            balance=user.balance,
            created_at=user.created_at,
            updated_at=user.updated_at,
            is_active=user.is_active,
        )


class UserSummaryMetadata(CamelModel):
    account_age_days: int
    api_version: str
    last_accessed: datetime
    features: list[str]

    @field_serializer("last_accessed")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)


class UserSummaryResponse(CamelModel):
    user: UserResponse
    metadata: UserSummaryMetadata
