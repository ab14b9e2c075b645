"""
User field validation.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")
MIN_AGE = 13
MAX_AGE = 120


def is_valid_email(email: str) -> bool:
    """Whole-string match; a trailing newline is not accepted."""
    return EMAIL_PATTERN.fullmatch(email) is not None


@dataclass
class ValidationResult:
    """Collected validation errors."""
    errors: List[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return ", ".join(self.errors)


def _check_age(result: ValidationResult, age: Optional[int]) -> None:
    if age is not None and not MIN_AGE <= age <= MAX_AGE:
        result.add_error(f"Age must be between {MIN_AGE} and {MAX_AGE}")


class UserValidator:
    """Business rules for user create and update payloads."""

    def validate_new_user(
        self,
        username: Optional[str],
        email: Optional[str],
        age: Optional[int] = None,
    ) -> ValidationResult:
        result = ValidationResult()

        if not username or not username.strip():
            result.add_error("Username is required")
        if not email or not is_valid_email(email):
            result.add_error("Valid email is required")
        _check_age(result, age)

        return result

    def validate_update_user(
        self,
        email: Optional[str] = None,
        age: Optional[int] = None,
    ) -> ValidationResult:
        result = ValidationResult()

        if email is not None and not is_valid_email(email):
            result.add_error("Invalid email format")
        _check_age(result, age)

        return result
