"""Quote entity: publication lifecycle, filtered search and statistics."""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import case, delete, distinct, func, insert, or_, select, update
from sqlalchemy.sql import ColumnElement, Select

from gratiday.database import Database, get_database, random_order
from gratiday.entities.base import (
    Entity,
    enum_value,
    from_store_timestamp,
    normalize_limit,
    to_store_timestamp,
)
from gratiday.errors import ValidationError, integrity_errors
from gratiday.models import categoria, frase, usuario
from gratiday.models.enums import QuoteStatus
from gratiday.schemas.quote import QuoteFilters, QuoteUpdate
from gratiday.schemas.stats import GlobalQuoteStats, QuoteStats
from gratiday.validation import ValidationResult, to_utc, utc_now, validate_quote

logger = logging.getLogger(__name__)

MISSING_REFERENCE = "The specified user or category does not exist"

# Columns persisted by update(); the creator never changes.
UPDATABLE_COLUMNS = ("texto", "autor", "scheduled_at", "status", "categoria_id")


def quote_stats_columns() -> list[ColumnElement]:
    """Aggregate columns counting quotes per status."""
    return [
        func.count().label("total_frases"),
        func.count(case((frase.c.status == QuoteStatus.PUBLISHED.value, 1))).label("frases_publicadas"),
        func.count(case((frase.c.status == QuoteStatus.DRAFT.value, 1))).label("frases_borrador"),
        func.count(case((frase.c.status == QuoteStatus.SCHEDULED.value, 1))).label("frases_programadas"),
    ]


def _coerce_filters(filters: QuoteFilters | Mapping[str, Any] | None) -> QuoteFilters:
    if filters is None:
        return QuoteFilters()
    if isinstance(filters, QuoteFilters):
        return filters
    try:
        return QuoteFilters.model_validate(dict(filters))
    except ValueError as exc:
        raise ValidationError([f"Invalid quote filters: {exc}"]) from exc


def build_filter_conditions(filters: QuoteFilters | Mapping[str, Any] | None) -> list[ColumnElement]:
    """Predicates for the filters that are set; callers AND them together."""
    filters = _coerce_filters(filters)
    conditions: list[ColumnElement] = []
    if filters.status:
        conditions.append(frase.c.status == filters.status)
    if filters.categoria_id:
        conditions.append(frase.c.categoria_id == filters.categoria_id)
    if filters.creado_por:
        conditions.append(frase.c.creado_por == filters.creado_por)
    if filters.search:
        conditions.append(
            or_(
                frase.c.texto.icontains(filters.search, autoescape=True),
                frase.c.autor.icontains(filters.search, autoescape=True),
            )
        )
    return conditions


def _joined(*columns: Any) -> Select:
    return select(*columns).select_from(
        frase.join(usuario, frase.c.creado_por == usuario.c.id_user).join(
            categoria, frase.c.categoria_id == categoria.c.id_category
        )
    )


def _detailed_select() -> Select:
    return _joined(
        frase,
        usuario.c.nombre.label("creado_por_nombre"),
        categoria.c.nombre.label("categoria_nombre"),
    )


class Quote(Entity):
    """A gratitude quote moving between draft, scheduled and published."""

    entity_name = "quote"
    id_field = "id_quote"
    patch_model = QuoteUpdate

    def __init__(
        self,
        texto: str = "",
        autor: str | None = None,
        creado_por: int | None = None,
        categoria_id: int | None = None,
        status: str | QuoteStatus = QuoteStatus.DRAFT,
        scheduled_at: datetime | str | None = None,
        fecha_creacion: datetime | None = None,
        id_quote: int | None = None,
        creado_por_nombre: str | None = None,
        categoria_nombre: str | None = None,
        db: Database | None = None,
    ):
        super().__init__(db, id_quote)
        self.texto = texto
        self.autor = autor or None
        self.creado_por = creado_por
        self.categoria_id = categoria_id
        self.status = enum_value(status)
        try:
            self.scheduled_at = to_utc(scheduled_at)
        except ValueError:
            # kept as given; validate() reports it
            self.scheduled_at = scheduled_at
        self.fecha_creacion = from_store_timestamp(fecha_creacion)
        self.creado_por_nombre = creado_por_nombre
        self.categoria_nombre = categoria_nombre

    @property
    def id_quote(self) -> int | None:
        return self._id

    @classmethod
    def from_row(cls, row: Mapping[str, Any], db: Database | None = None) -> "Quote":
        return cls(
            texto=row["texto"],
            autor=row["autor"],
            creado_por=row["creado_por"],
            categoria_id=row["categoria_id"],
            status=row["status"],
            scheduled_at=row["scheduled_at"],
            fecha_creacion=row.get("fecha_creacion"),
            id_quote=row["id_quote"],
            creado_por_nombre=row.get("creado_por_nombre"),
            categoria_nombre=row.get("categoria_nombre"),
            db=db,
        )

    def validate(self, now: datetime | None = None) -> ValidationResult:
        return validate_quote(
            texto=self.texto,
            autor=self.autor,
            creado_por=self.creado_por,
            categoria_id=self.categoria_id,
            status=self.status,
            scheduled_at=self.scheduled_at,
            now=now,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self) -> "Quote":
        self._raise_if_invalid(self.validate())
        with integrity_errors(reference=MISSING_REFERENCE):
            result = self.db.query(
                insert(frase).values(
                    texto=self.texto,
                    autor=self.autor,
                    scheduled_at=to_store_timestamp(self.scheduled_at),
                    status=self.status,
                    creado_por=self.creado_por,
                    categoria_id=self.categoria_id,
                )
            )
        self._assign_id(result.lastrowid)
        self.fecha_creacion = from_store_timestamp(
            self.db.query(select(frase.c.fecha_creacion).where(frase.c.id_quote == self._id)).scalar()
        )
        logger.info(f"Created quote {self._id} with status {self.status}")
        return self

    def update(self, fields: QuoteUpdate | Mapping[str, Any] | None = None) -> "Quote":
        """Apply a patch, re-validate the merged quote and persist it."""
        quote_id = self._require_id("update")
        changes = self._coerce_patch(fields)
        merged = {column: getattr(self, column) for column in UPDATABLE_COLUMNS}
        merged.update(changes)
        merged["autor"] = merged["autor"] or None

        self._raise_if_invalid(
            validate_quote(creado_por=self.creado_por, **merged)
        )

        values = dict(merged, scheduled_at=to_store_timestamp(merged["scheduled_at"]))
        with integrity_errors(reference=MISSING_REFERENCE):
            self.db.query(update(frase).where(frase.c.id_quote == quote_id).values(**values))

        if merged["categoria_id"] != self.categoria_id:
            self.categoria_nombre = None
        for column, value in merged.items():
            setattr(self, column, value)
        self.scheduled_at = to_utc(merged["scheduled_at"])
        return self

    def publish(self) -> "Quote":
        """Publish now; any scheduled date is cleared."""
        return self.update({"status": QuoteStatus.PUBLISHED.value, "scheduled_at": None})

    def schedule(self, scheduled_at: datetime | str) -> "Quote":
        """Schedule for a future publication date."""
        return self.update({"status": QuoteStatus.SCHEDULED.value, "scheduled_at": scheduled_at})

    def draft(self) -> "Quote":
        """Move back to draft; any scheduled date is cleared."""
        return self.update({"status": QuoteStatus.DRAFT.value, "scheduled_at": None})

    def delete(self) -> bool:
        quote_id = self._require_id("delete")
        result = self.db.query(delete(frase).where(frase.c.id_quote == quote_id))
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @classmethod
    def find_by_id(
        cls, quote_id: int, include_details: bool = True, db: Database | None = None
    ) -> "Quote | None":
        db = db or get_database()
        stmt = _detailed_select() if include_details else select(frase)
        row = db.query(stmt.where(frase.c.id_quote == quote_id)).first()
        return cls.from_row(row, db) if row else None

    @classmethod
    def find_all(
        cls,
        filters: QuoteFilters | Mapping[str, Any] | None = None,
        limit: int | None = 50,
        offset: int = 0,
        db: Database | None = None,
    ) -> list["Quote"]:
        """Quotes matching every set filter, newest first. ``limit=None`` is unbounded."""
        db = db or get_database()
        stmt = (
            _detailed_select()
            .where(*build_filter_conditions(filters))
            .order_by(frase.c.fecha_creacion.desc(), frase.c.id_quote.desc())
            .limit(normalize_limit(limit))
            .offset(offset)
        )
        return [cls.from_row(row, db) for row in db.query(stmt)]

    @classmethod
    def find_published(
        cls, limit: int | None = 50, offset: int = 0, db: Database | None = None
    ) -> list["Quote"]:
        return cls.find_all({"status": QuoteStatus.PUBLISHED.value}, limit, offset, db=db)

    @classmethod
    def find_scheduled(cls, db: Database | None = None) -> list["Quote"]:
        """Scheduled quotes whose publication date has passed, earliest first.

        Read only: publishing them is up to the caller.
        """
        db = db or get_database()
        stmt = (
            _detailed_select()
            .where(
                frase.c.status == QuoteStatus.SCHEDULED.value,
                frase.c.scheduled_at <= to_store_timestamp(utc_now()),
            )
            .order_by(frase.c.scheduled_at.asc(), frase.c.id_quote.asc())
        )
        return [cls.from_row(row, db) for row in db.query(stmt)]

    @classmethod
    def find_random(
        cls, count: int = 1, categoria_id: int | None = None, db: Database | None = None
    ) -> list["Quote"]:
        """Random sample of published quotes, optionally from one category."""
        db = db or get_database()
        stmt = _detailed_select().where(frase.c.status == QuoteStatus.PUBLISHED.value)
        if categoria_id:
            stmt = stmt.where(frase.c.categoria_id == categoria_id)
        stmt = stmt.order_by(random_order()).limit(normalize_limit(count))
        return [cls.from_row(row, db) for row in db.query(stmt)]

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    @classmethod
    def count(
        cls, filters: QuoteFilters | Mapping[str, Any] | None = None, db: Database | None = None
    ) -> int:
        """Number of quotes :meth:`find_all` would return without pagination."""
        db = db or get_database()
        stmt = _joined(func.count()).where(*build_filter_conditions(filters))
        return db.query(stmt).scalar() or 0

    @classmethod
    def get_user_stats(cls, user_id: int, db: Database | None = None) -> QuoteStats:
        db = db or get_database()
        row = db.query(select(*quote_stats_columns()).where(frase.c.creado_por == user_id)).first()
        return QuoteStats.model_validate({key: value or 0 for key, value in row.items()})

    @classmethod
    def get_global_stats(cls, db: Database | None = None) -> GlobalQuoteStats:
        db = db or get_database()
        stmt = select(
            *quote_stats_columns(),
            func.count(distinct(frase.c.creado_por)).label("usuarios_activos"),
            func.count(distinct(frase.c.categoria_id)).label("categorias_usadas"),
        )
        row = db.query(stmt).first()
        return GlobalQuoteStats.model_validate({key: value or 0 for key, value in row.items()})

    def to_dict(self) -> dict[str, Any]:
        return {
            "id_quote": self.id_quote,
            "texto": self.texto,
            "autor": self.autor,
            "fecha_creacion": self.fecha_creacion,
            "scheduled_at": self.scheduled_at,
            "status": self.status,
            "creado_por": self.creado_por,
            "categoria_id": self.categoria_id,
            "creado_por_nombre": self.creado_por_nombre,
            "categoria_nombre": self.categoria_nombre,
        }
