# bank_api/validators/parameter_validator.py

from bank_api.validators import field_rules
from bank_api.validators.validation_result import ValidationResult


class ParameterValidator:
    """Checks for route and query parameters."""

    @staticmethod
    def validate_email_parameter(email: str | None) -> ValidationResult:
        result = ValidationResult()
        if field_rules.is_blank(email):
            result.add_error("Email parameter is required.")
        return result

    @staticmethod
    def validate_user_id(user_id: int) -> ValidationResult:
        result = ValidationResult()
        if user_id <= 0:
            result.add_error("User ID must be a positive integer.")
        return result
