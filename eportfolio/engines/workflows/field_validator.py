"""
Field validation for request and verification submissions.

Every check returns a ValidationResult instead of raising, so a workflow
can run them all and report every problem at once.
"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, List, Optional, Type

from pydantic import BaseModel


class ValidationStatus(str, Enum):
    """Validation status."""
    VALID = "valid"
    INVALID = "invalid"


class ValidationResult(BaseModel):
    """Result of a single field check."""

    status: ValidationStatus
    message: str
    field: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status == ValidationStatus.VALID


def _valid(field: str) -> ValidationResult:
    return ValidationResult(status=ValidationStatus.VALID, message="ok", field=field)


def _invalid(field: str, message: str) -> ValidationResult:
    return ValidationResult(status=ValidationStatus.INVALID, message=message, field=field)


def collect_errors(results: List[ValidationResult]) -> List[str]:
    """Messages of every failed check, in check order."""
    return [r.message for r in results if not r.is_valid]


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce a date, datetime or ISO-8601 string to an aware UTC datetime.

    Date-only values mean the start of that day in UTC; naive datetimes
    are taken as UTC. Returns None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        # Offset pushes the instant outside datetime.min..datetime.max
        return None


class SubmissionValidator:
    """Field checks shared by the request and verification workflows."""

    RATING_MIN = 1
    RATING_MAX = 5
    PATIENT_AGE_MAX = 150

    @classmethod
    def validate_required(cls, value: Any, field: str, message: str) -> ValidationResult:
        """Value must be a non-blank string."""
        if not isinstance(value, str) or not value.strip():
            return _invalid(field, message)
        return _valid(field)

    @classmethod
    def validate_choice(
        cls,
        value: Any,
        enum_type: Type[Enum],
        field: str,
        label: str,
    ) -> ValidationResult:
        """Value must be a member (or member value) of enum_type."""
        try:
            enum_type(value)
        except ValueError:
            allowed = ", ".join(str(member.value) for member in enum_type)
            return _invalid(field, f"{label} must be one of: {allowed}")
        return _valid(field)

    @classmethod
    def validate_date_performed(cls, value: Any, now: datetime) -> ValidationResult:
        """Date must be present, parse, and not lie after now."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return _invalid("date_performed", "Date performed is required")
        performed = parse_datetime(value)
        if performed is None:
            return _invalid("date_performed", "Invalid date format for datePerformed")
        if performed > now:
            return _invalid("date_performed", "Date performed cannot be in the future")
        return _valid("date_performed")

    @classmethod
    def validate_rating(cls, rating: Any) -> ValidationResult:
        if (
            isinstance(rating, bool)
            or not isinstance(rating, int)
            or not cls.RATING_MIN <= rating <= cls.RATING_MAX
        ):
            return _invalid(
                "rating", f"Rating must be between {cls.RATING_MIN} and {cls.RATING_MAX}"
            )
        return _valid("rating")

    @classmethod
    def validate_patient_age(cls, age: Any) -> ValidationResult:
        """Optional; checked only when supplied."""
        if age is None:
            return _valid("patient_age")
        if isinstance(age, bool) or not isinstance(age, int) or not 0 <= age <= cls.PATIENT_AGE_MAX:
            return _invalid("patient_age", f"Patient age must be between 0 and {cls.PATIENT_AGE_MAX}")
        return _valid("patient_age")

    @classmethod
    def validate_optional_text(cls, value: Any, field: str, label: str) -> ValidationResult:
        if value is None or isinstance(value, str):
            return _valid(field)
        return _invalid(field, f"{label} must be text")

    @classmethod
    def validate_text_list(cls, value: Any, field: str, label: str) -> ValidationResult:
        """Optional list of strings; a bare string is not a list."""
        if value is None:
            return _valid(field)
        if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
            return _invalid(field, f"{label} must be a list of strings")
        return _valid(field)
