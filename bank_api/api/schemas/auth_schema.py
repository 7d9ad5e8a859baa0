# bank_api/api/schemas/auth_schema.py
from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_serializer

from bank_api.api.schemas._datetime_serializer import serialize_dt
from bank_api.api.schemas.user_schema import CamelModel, UserResponse
from bank_api.entities.user import NewUser

PASSWORD_MIN_LENGTH = 6


class LoginRequest(CamelModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=200)


class RegisterRequest(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=200)
    phone_number: str | None = None

    def to_new_user(self) -> NewUser:
        return NewUser(**self.model_dump())


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1, max_length=200)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=200)


class AuthResponse(CamelModel):
    token: str
    token_type: str = "Bearer"
    expires_at: datetime
    user: UserResponse

    @field_serializer("expires_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)


class MessageResponse(CamelModel):
    message: str
