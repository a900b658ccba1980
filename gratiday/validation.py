"""Field validation for users, categories and quotes.

Every validator is a pure function returning a :class:`ValidationResult`. Rules
are checked in a fixed order and all violations are reported, not just the
first one.
"""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from gratiday.models.enums import QUOTE_STATUSES, USER_ROLES, QuoteStatus

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

USER_NAME_MIN_LENGTH = 2
PASSWORD_MIN_LENGTH = 6
CATEGORY_NAME_MIN_LENGTH = 2
CATEGORY_NAME_MAX_LENGTH = 80
CATEGORY_DESCRIPTION_MAX_LENGTH = 255
QUOTE_TEXT_MIN_LENGTH = 10
QUOTE_TEXT_MAX_LENGTH = 1000
QUOTE_AUTHOR_MAX_LENGTH = 120

_datetime_adapter = TypeAdapter(datetime)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation pass."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_utc(value: Any) -> datetime | None:
    """Coerce a datetime or ISO-8601 string to an aware UTC datetime.

    Naive values are taken to be UTC. Raises ``ValueError`` for anything that is
    not a timestamp.
    """
    if value is None:
        return None
    if not isinstance(value, datetime):
        try:
            value = _datetime_adapter.validate_python(value)
        except PydanticValidationError as exc:
            raise ValueError(f"not a valid timestamp: {value!r}") from exc
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def is_valid_email(email: str | None) -> bool:
    return isinstance(email, str) and EMAIL_PATTERN.match(email) is not None


def _is_positive_id(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return int(value) > 0
    except (TypeError, ValueError):
        return False


def validate_user(
    *,
    nombre: str | None,
    correo_electronico: str | None,
    password: str | None,
    rol: str | None,
) -> ValidationResult:
    """Validate user fields.

    ``password`` is the plaintext before hashing, or the stored hash once the
    account exists.
    """
    errors = []
    if not nombre or len(nombre.strip()) < USER_NAME_MIN_LENGTH:
        errors.append(f"Name must be at least {USER_NAME_MIN_LENGTH} characters long")
    if not is_valid_email(correo_electronico):
        errors.append("Email address is not valid")
    if not password or len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if rol not in USER_ROLES:
        errors.append('Role must be "admin" or "user"')
    return ValidationResult(errors)


def validate_category(*, nombre: str | None, descripcion: str | None) -> ValidationResult:
    errors = []
    if not nombre or len(nombre.strip()) < CATEGORY_NAME_MIN_LENGTH:
        errors.append(f"Name must be at least {CATEGORY_NAME_MIN_LENGTH} characters long")
    if nombre and len(nombre) > CATEGORY_NAME_MAX_LENGTH:
        errors.append(f"Name cannot exceed {CATEGORY_NAME_MAX_LENGTH} characters")
    if descripcion and len(descripcion) > CATEGORY_DESCRIPTION_MAX_LENGTH:
        errors.append(f"Description cannot exceed {CATEGORY_DESCRIPTION_MAX_LENGTH} characters")
    return ValidationResult(errors)


def validate_quote(
    *,
    texto: str | None,
    autor: str | None,
    creado_por: Any,
    categoria_id: Any,
    status: str | None,
    scheduled_at: Any,
    now: datetime | None = None,
) -> ValidationResult:
    """Validate quote fields against the publication rules.

    ``now`` defaults to the current UTC time; the scheduled timestamp must be
    strictly after it.
    """
    errors = []
    if not texto or len(texto.strip()) < QUOTE_TEXT_MIN_LENGTH:
        errors.append(f"Text must be at least {QUOTE_TEXT_MIN_LENGTH} characters long")
    if texto and len(texto) > QUOTE_TEXT_MAX_LENGTH:
        errors.append(f"Text cannot exceed {QUOTE_TEXT_MAX_LENGTH} characters")
    if autor and len(autor) > QUOTE_AUTHOR_MAX_LENGTH:
        errors.append(f"Author name cannot exceed {QUOTE_AUTHOR_MAX_LENGTH} characters")
    if not _is_positive_id(creado_por):
        errors.append("A creator user id is required")
    if not _is_positive_id(categoria_id):
        errors.append("A category id is required")
    if status not in QUOTE_STATUSES:
        errors.append("Status must be draft, scheduled or published")
    if status == QuoteStatus.SCHEDULED and scheduled_at is None:
        errors.append("Scheduled quotes require a publication date")
    if scheduled_at is not None:
        try:
            when = to_utc(scheduled_at)
        except ValueError:
            errors.append("Scheduled publication date is not a valid date")
        else:
            if when <= to_utc(now or utc_now()):
                errors.append("Scheduled publication date must be in the future")
    return ValidationResult(errors)
