# bank_api/validators/create_user_validator.py

from bank_api.entities.user import NewUser
from bank_api.services.user_service import UserService
from bank_api.validators import field_rules
from bank_api.validators.validation_result import ValidationErrorKind, ValidationResult


class CreateUserValidator:
    """
    Validates a new account (admin creation and self registration).

    ``validate`` checks field shape only. ``validate_with_store`` adds the
    email uniqueness check, and skips it when the shape is already invalid.
    """

    def __init__(self, user_service: UserService) -> None:
        self._user_service = user_service

    def validate(self, new_user: NewUser) -> ValidationResult:
        if new_user is None:
            raise ValueError("new_user must not be None")

        result = ValidationResult()

        if field_rules.is_blank(new_user.first_name):
            result.add_error("FirstName is required and cannot be empty.")
        elif field_rules.too_long(new_user.first_name, field_rules.NAME_MAX_LENGTH):
            result.add_error(f"FirstName cannot exceed {field_rules.NAME_MAX_LENGTH} characters.")

        if field_rules.is_blank(new_user.last_name):
            result.add_error("LastName is required and cannot be empty.")
        elif field_rules.too_long(new_user.last_name, field_rules.NAME_MAX_LENGTH):
            result.add_error(f"LastName cannot exceed {field_rules.NAME_MAX_LENGTH} characters.")

        if field_rules.is_blank(new_user.email):
            result.add_error("Email is required and cannot be empty.")
        elif field_rules.too_long(new_user.email, field_rules.EMAIL_MAX_LENGTH):
            result.add_error(f"Email cannot exceed {field_rules.EMAIL_MAX_LENGTH} characters.")
        elif not field_rules.is_valid_email(new_user.email):
            result.add_error("Email format is invalid.")

        if new_user.initial_balance < 0:
            result.add_error("Initial balance cannot be negative.")

        if not field_rules.is_blank(new_user.phone_number):
            if field_rules.too_long(new_user.phone_number, field_rules.PHONE_MAX_LENGTH):
                result.add_error(
                    f"Phone number cannot exceed {field_rules.PHONE_MAX_LENGTH} characters."
                )
            elif not field_rules.is_valid_phone_number(new_user.phone_number):
                result.add_error("Phone number format is invalid.")

        return result

    def validate_with_store(self, new_user: NewUser) -> ValidationResult:
        result = self.validate(new_user)
        if not result.is_valid:
            return result

        if self._user_service.email_exists(new_user.email):
            result.add_error(
                f"User with email {new_user.email} already exists.",
                kind=ValidationErrorKind.CONFLICT,
            )

        return result
