# bank_api/validators/update_user_validator.py

from bank_api.entities.user import UserChanges
from bank_api.services.user_service import UserService
from bank_api.validators import field_rules
from bank_api.validators.validation_result import ValidationErrorKind, ValidationResult


class UpdateUserValidator:
    """Validates a partial update of user ``user_id``."""

    def __init__(self, user_service: UserService) -> None:
        self._user_service = user_service

    def validate(self, item: tuple[int, UserChanges]) -> ValidationResult:
        user_id, changes = item
        if changes is None:
            raise ValueError("changes must not be None")

        result = ValidationResult()

        if not field_rules.is_blank(changes.email):
            if field_rules.too_long(changes.email, field_rules.EMAIL_MAX_LENGTH):
                result.add_error(f"Email cannot exceed {field_rules.EMAIL_MAX_LENGTH} characters.")
            elif not field_rules.is_valid_email(changes.email):
                result.add_error("Email format is invalid.")

        if not field_rules.is_blank(changes.phone_number):
            if field_rules.too_long(changes.phone_number, field_rules.PHONE_MAX_LENGTH):
                result.add_error(
                    f"Phone number cannot exceed {field_rules.PHONE_MAX_LENGTH} characters."
                )
            elif not field_rules.is_valid_phone_number(changes.phone_number):
                result.add_error("Phone number format is invalid.")

        # a name may be omitted, but not blanked
        if changes.first_name is not None and field_rules.is_blank(changes.first_name):
            result.add_error("FirstName cannot be empty if provided.")
        elif field_rules.too_long(changes.first_name, field_rules.NAME_MAX_LENGTH):
            result.add_error(f"FirstName cannot exceed {field_rules.NAME_MAX_LENGTH} characters.")

        if changes.last_name is not None and field_rules.is_blank(changes.last_name):
            result.add_error("LastName cannot be empty if provided.")
        elif field_rules.too_long(changes.last_name, field_rules.NAME_MAX_LENGTH):
            result.add_error(f"LastName cannot exceed {field_rules.NAME_MAX_LENGTH} characters.")

        return result

    def validate_with_store(self, item: tuple[int, UserChanges]) -> ValidationResult:
        result = self.validate(item)
        if not result.is_valid:
            return result

        user_id, changes = item

        if not self._user_service.user_exists(user_id):
            result.add_error(f"User with ID {user_id} not found.", kind=ValidationErrorKind.NOT_FOUND)
            return result

        if not field_rules.is_blank(changes.email):
            existing = self._user_service.get_user_by_email(changes.email)
            if existing is not None and existing.id != user_id:
                result.add_error(
                    f"User with email {changes.email.strip()} already exists.",
                    kind=ValidationErrorKind.CONFLICT,
                )

        return result
