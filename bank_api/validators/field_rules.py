# bank_api/validators/field_rules.py
"""Shape checks shared by the user validators. Pure functions, no I/O."""

import re

from email_validator import EmailNotValidError, validate_email

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 20

_PHONE_SEPARATORS = re.compile(r"[ \-()+]")
_PHONE_DIGITS = re.compile(r"[0-9]{7,15}")


def is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def is_valid_email(email: str) -> bool:
    # a single bare address: no display name, no padding, no list
    if email != email.strip() or any(ch.isspace() for ch in email):
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_phone_number(phone_number: str) -> bool:
    cleaned = _PHONE_SEPARATORS.sub("", phone_number)
    return _PHONE_DIGITS.fullmatch(cleaned) is not None


def too_long(value: str | None, limit: int) -> bool:
    return value is not None and len(value) > limit
