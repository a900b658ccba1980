"""Shared plumbing for entity classes."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from gratiday.database import Database, get_database
from gratiday.errors import StateError, ValidationError
from gratiday.validation import ValidationResult, to_utc


def to_store_timestamp(value: datetime | None) -> datetime | None:
    """Aware UTC value bound to ``DateTime(timezone=True)`` columns.

    Backends without zone support (SQLite, MySQL ``DATETIME`` with the session
    at ``+00:00``) keep its UTC wall-clock time.
    """
    return to_utc(value)


def from_store_timestamp(value: Any) -> datetime | None:
    try:
        return to_utc(value)
    except ValueError:
        return None


def enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def normalize_limit(limit: int | None) -> int | None:
    """``None`` means unbounded; negative values are rejected."""
    if limit is not None and limit < 0:
        raise ValueError("limit must not be negative")
    return limit


class Entity:
    """Base class holding the database handle and identifier rules.

    The identifier is ``None`` until the row exists and cannot be reassigned
    afterwards.
    """

    entity_name: ClassVar[str] = "entity"
    id_field: ClassVar[str] = "id"
    patch_model: ClassVar[type[BaseModel]]

    def __init__(self, db: Database | None = None, identifier: int | None = None):
        self.db = db or get_database()
        self._id = identifier

    @property
    def identifier(self) -> int | None:
        return self._id

    def _assign_id(self, identifier: int | None) -> None:
        if self._id is not None:
            raise StateError(f"{self.entity_name} already has identifier {self._id}")
        if identifier is None:
            raise StateError(f"The store returned no identifier for the new {self.entity_name}")
        self._id = int(identifier)

    def _require_id(self, action: str) -> int:
        if self._id is None:
            raise StateError(f"Cannot {action} a {self.entity_name} without an identifier")
        return self._id

    @staticmethod
    def _raise_if_invalid(result: ValidationResult) -> None:
        if not result.is_valid:
            raise ValidationError(result.errors)

    @classmethod
    def _coerce_patch(cls, fields: BaseModel | Mapping[str, Any] | None) -> dict[str, Any]:
        """Turn caller input into the set of explicitly supplied, updatable fields.

        The identifier key is ignored; unknown keys and badly typed values raise
        :class:`ValidationError`.
        """
        if fields is None:
            return {}
        if isinstance(fields, cls.patch_model):
            return fields.model_dump(exclude_unset=True)
        if isinstance(fields, BaseModel):
            fields = fields.model_dump(exclude_unset=True)
        data = {key: value for key, value in fields.items() if key != cls.id_field}
        try:
            patch = cls.patch_model.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(
                [f"{'.'.join(str(p) for p in error['loc'])}: {error['msg']}" for error in exc.errors()]
            ) from exc
        return patch.model_dump(exclude_unset=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id_field}={self._id}>"
