"""
userapi/validators.py

Field-constraint checks for incoming user payloads.

Each field has an ordered list of (predicate, message) rules. All rules of all
fields are evaluated and every failure is collected, so a client sees the full
list of problems in a single 400 response.

Two modes:
 - create: every field is required; a missing field fails 'not blank'.
 - partial: missing fields are skipped (PATCH keeps the stored value).
"""

from typing import Callable, Dict, List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email

from userapi.exceptions import RequestValidationFailed
from userapi.schemas.error import FieldError
from userapi.schemas.user import UserRequest

Rule = Tuple[Callable[[Optional[str]], bool], str]

TRIM_MESSAGE = "field cannot have blank spaces at the beginning or at end"
NOT_BLANK_MESSAGE = "must not be null or empty"
INVALID_EMAIL_MESSAGE = "invalid e-mail"

# Control characters and the ASCII space; other Unicode whitespace (e.g. NBSP)
# counts as content.
TRIMMABLE = "".join(map(chr, range(0x21)))


def is_trimmed(value: Optional[str]) -> bool:
    """True unless the value carries leading or trailing whitespace."""
    return value is None or value == value.strip(TRIMMABLE)


def is_not_blank(value: Optional[str]) -> bool:
    return value is not None and value.strip(TRIMMABLE) != ""


def length_between(min_len: int, max_len: int) -> Rule:
    def check(value: Optional[str]) -> bool:
        return value is None or min_len <= len(value) <= max_len
    return check, f"must be between {min_len} and {max_len} characters"


def is_email(value: Optional[str]) -> bool:
    # blank values are left to the not-blank rule
    if value is None or value == "":
        return True
    try:
        # syntax only: single-label and special-use domains (localhost, *.test) pass
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
            allow_quoted_local=True,
        )
    except EmailNotValidError:
        return False
    return True


USER_RULES: Dict[str, List[Rule]] = {
    "name": [
        (is_trimmed, TRIM_MESSAGE),
        length_between(3, 50),
        (is_not_blank, NOT_BLANK_MESSAGE),
    ],
    "email": [
        (is_trimmed, TRIM_MESSAGE),
        (is_email, INVALID_EMAIL_MESSAGE),
        (is_not_blank, NOT_BLANK_MESSAGE),
    ],
    "password": [
        (is_trimmed, TRIM_MESSAGE),
        length_between(8, 20),
        (is_not_blank, NOT_BLANK_MESSAGE),
    ],
}


def collect_errors(request: UserRequest, partial: bool = False) -> List[FieldError]:
    """
    Run every rule against the request and return all violations, ordered by
    field and then by rule. An empty list means the request is valid.
    """
    errors = []
    for field_name, rules in USER_RULES.items():
        value = getattr(request, field_name)
        if partial and value is None:
            continue
        for predicate, message in rules:
            if not predicate(value):
                errors.append(FieldError(field_name=field_name, message=message))
    return errors


def validate_user_request(request: UserRequest, partial: bool = False) -> UserRequest:
    """
    Return the request unchanged if it is valid, otherwise raise
    RequestValidationFailed with every violation.
    """
    errors = collect_errors(request, partial=partial)
    if errors:
        raise RequestValidationFailed(errors)
    return request


def valid_user_request(payload: UserRequest) -> UserRequest:
    """FastAPI dependency: body validated in create mode."""
    return validate_user_request(payload)


def valid_partial_user_request(payload: UserRequest) -> UserRequest:
    """FastAPI dependency: body validated in partial (PATCH) mode."""
    return validate_user_request(payload, partial=True)
