# bank_api/validators/validation_result.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class ValidationErrorKind(IntEnum):
    # ordered by precedence: the highest kind seen decides the HTTP status
    INVALID = 1
    CONFLICT = 2
    NOT_FOUND = 3


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    kind: ValidationErrorKind | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, message: str, *, kind: ValidationErrorKind = ValidationErrorKind.INVALID) -> None:
        self.errors.append(message)
        if self.kind is None or kind > self.kind:
            self.kind = kind

    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None
