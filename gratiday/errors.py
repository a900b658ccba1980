"""Domain error taxonomy and store-error translation."""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from enum import Enum
from typing import Any


class GratidayError(Exception):
    """Base class for every error raised by the data-access layer."""


class ValidationError(GratidayError):
    """One or more field rules were violated. Raised before touching the store."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid data: {', '.join(self.errors)}")


class DuplicateError(GratidayError):
    """A unique constraint (user email, category name) was violated."""


class ReferenceNotFoundError(GratidayError):
    """A referenced user or category does not exist."""


class DependencyError(GratidayError):
    """A row cannot be deleted while other rows still reference it."""

    def __init__(self, message: str, count: int | None = None):
        self.count = count
        super().__init__(message)


class StateError(GratidayError):
    """An operation was attempted without a required connection or identifier."""


class DatabaseConnectionError(GratidayError):
    """The store could not be reached."""


class QueryError(GratidayError):
    """A statement failed to execute.

    ``params`` is kept on the instance for diagnostics but never rendered into
    the message, so logging the exception does not leak bound values.
    """

    def __init__(
        self,
        message: str,
        *,
        statement: str | None = None,
        params: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        self.statement = statement
        self.params = dict(params) if params else {}
        self.cause = cause
        super().__init__(message)

    @property
    def param_names(self) -> list[str]:
        return sorted(self.params)


class IntegrityKind(str, Enum):
    """Store-independent category of an integrity violation."""

    DUPLICATE = "duplicate"
    FOREIGN_KEY = "foreign_key"
    OTHER = "other"


class IntegrityViolation(QueryError):
    """A statement was rejected by a constraint of the store."""

    def __init__(self, kind: IntegrityKind, message: str, **kwargs: Any):
        self.kind = kind
        super().__init__(message, **kwargs)


# Driver error codes: MySQL numeric codes and PostgreSQL SQLSTATE values.
_DUPLICATE_CODES = {1062, 1169, "23505"}
_FOREIGN_KEY_CODES = {1216, 1217, 1451, 1452, "23503"}


def classify_integrity_error(exc: BaseException) -> IntegrityKind:
    """Map a driver-level integrity error onto an :class:`IntegrityKind`."""
    orig = getattr(exc, "orig", exc)

    codes: list[Any] = [getattr(orig, "pgcode", None), getattr(orig, "sqlstate", None)]
    args = getattr(orig, "args", ())
    if args:
        codes.append(args[0])
    for code in codes:
        if code in _DUPLICATE_CODES:
            return IntegrityKind.DUPLICATE
        if code in _FOREIGN_KEY_CODES:
            return IntegrityKind.FOREIGN_KEY

    # SQLite only reports a message
    message = str(orig).lower()
    if "unique" in message or "duplicate" in message:
        return IntegrityKind.DUPLICATE
    if "foreign key" in message:
        return IntegrityKind.FOREIGN_KEY
    return IntegrityKind.OTHER


@contextmanager
def integrity_errors(
    *,
    duplicate: str | None = None,
    reference: str | None = None,
    dependency: str | None = None,
) -> Iterator[None]:
    """Translate :class:`IntegrityViolation` raised inside the block into domain errors.

    Kinds without a message configured propagate unchanged.
    """
    try:
        yield
    except IntegrityViolation as exc:
        if exc.kind is IntegrityKind.DUPLICATE and duplicate:
            raise DuplicateError(duplicate) from exc
        if exc.kind is IntegrityKind.FOREIGN_KEY and reference:
            raise ReferenceNotFoundError(reference) from exc
        if exc.kind is IntegrityKind.FOREIGN_KEY and dependency:
            raise DependencyError(dependency) from exc
        raise
