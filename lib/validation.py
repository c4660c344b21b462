# =============================================================================
# lib/validation.py - Input Validation Helpers
# =============================================================================
# Email and password checks for the registration and password-reset forms.
# Error messages are user-facing (Korean) and collected rather than
# short-circuited, so a form can show every problem at once.
# =============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Anything@anything.tld with no whitespace; allows IDN domains like 한국.com
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 8


@dataclass
class ValidationResult:
    """Outcome of a validation check."""
    valid: bool
    errors: list[str] = field(default_factory=list)

    @property
    def error(self) -> str | None:
        """First error message, if any."""
        return self.errors[0] if self.errors else None


def validate_email(value: str | None) -> ValidationResult:
    """
    Validate an email address.

    Example:
        validate_email("user.name@domain.co.kr").valid -> True
        validate_email("invalid-email").valid -> False
    """
    if not value or not value.strip():
        return ValidationResult(valid=False, errors=["이메일을 입력해주세요"])

    if not EMAIL_PATTERN.match(value):
        return ValidationResult(valid=False, errors=["올바른 이메일 형식이 아닙니다"])

    return ValidationResult(valid=True)


def validate_password(value: str | None) -> ValidationResult:
    """
    Validate password strength.

    Requires 8+ characters with upper case, lower case, a digit and a
    special character.
    """
    if not value:
        return ValidationResult(valid=False, errors=["비밀번호를 입력해주세요"])

    errors = []
    if len(value) < MIN_PASSWORD_LENGTH:
        errors.append("최소 8자 이상이어야 합니다")
    if not re.search(r"[A-Z]", value):
        errors.append("대문자가 포함되어야 합니다")
    if not re.search(r"[a-z]", value):
        errors.append("소문자가 포함되어야 합니다")
    if not re.search(r"[0-9]", value):
        errors.append("숫자가 포함되어야 합니다")
    if not re.search(r"[^A-Za-z0-9]", value):
        errors.append("특수문자가 포함되어야 합니다")

    return ValidationResult(valid=not errors, errors=errors)
