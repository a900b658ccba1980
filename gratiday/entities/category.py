"""Category entity."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, func, insert, or_, select, update

from gratiday.database import Database, get_database
from gratiday.entities.base import Entity, normalize_limit
from gratiday.entities.quote import Quote, quote_stats_columns
from gratiday.errors import DependencyError, integrity_errors
from gratiday.models import categoria, frase
from gratiday.schemas.category import CategoryUpdate
from gratiday.schemas.stats import QuoteStats
from gratiday.validation import ValidationResult, validate_category

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A category with that name already exists"


class Category(Entity):
    """Topical grouping for quotes."""

    entity_name = "category"
    id_field = "id_category"
    patch_model = CategoryUpdate

    def __init__(
        self,
        nombre: str = "",
        descripcion: str | None = None,
        id_category: int | None = None,
        db: Database | None = None,
    ):
        super().__init__(db, id_category)
        self.nombre = nombre
        self.descripcion = descripcion or None

    @property
    def id_category(self) -> int | None:
        return self._id

    @classmethod
    def from_row(cls, row: Mapping[str, Any], db: Database | None = None) -> "Category":
        return cls(
            nombre=row["nombre"],
            descripcion=row["descripcion"],
            id_category=row["id_category"],
            db=db,
        )

    def validate(self) -> ValidationResult:
        return validate_category(nombre=self.nombre, descripcion=self.descripcion)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self) -> "Category":
        self._raise_if_invalid(self.validate())
        with integrity_errors(duplicate=DUPLICATE_NAME):
            result = self.db.query(
                insert(categoria).values(nombre=self.nombre, descripcion=self.descripcion)
            )
        self._assign_id(result.lastrowid)
        logger.info(f"Created category {self._id} ({self.nombre})")
        return self

    def update(self, fields: CategoryUpdate | Mapping[str, Any] | None = None) -> "Category":
        category_id = self._require_id("update")
        merged = {"nombre": self.nombre, "descripcion": self.descripcion, **self._coerce_patch(fields)}
        merged["descripcion"] = merged["descripcion"] or None
        self._raise_if_invalid(validate_category(**merged))

        with integrity_errors(duplicate=DUPLICATE_NAME):
            self.db.query(
                update(categoria).where(categoria.c.id_category == category_id).values(**merged)
            )
        self.nombre = merged["nombre"]
        self.descripcion = merged["descripcion"]
        return self

    def delete(self, force_delete: bool = False) -> bool:
        """Delete the category.

        Without ``force_delete`` a category that still has quotes is kept and
        :class:`DependencyError` is raised. With it, the category and its quotes
        are removed in one transaction.
        """
        category_id = self._require_id("delete")

        if not force_delete:
            count = self.get_frases_count()
            if count > 0:
                raise DependencyError(
                    f"Category '{self.nombre}' cannot be deleted because it has {count} associated quote(s)",
                    count=count,
                )
            with integrity_errors(dependency="Category cannot be deleted because it has associated quotes"):
                result = self.db.query(delete(categoria).where(categoria.c.id_category == category_id))
            return result.rowcount > 0

        with self.db.transaction():
            removed = self.db.query(delete(frase).where(frase.c.categoria_id == category_id))
            result = self.db.query(delete(categoria).where(categoria.c.id_category == category_id))
        if removed.rowcount:
            logger.info(f"Force-deleted category {category_id} with {removed.rowcount} quote(s)")
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @classmethod
    def find_by_id(cls, category_id: int, db: Database | None = None) -> "Category | None":
        db = db or get_database()
        row = db.query(select(categoria).where(categoria.c.id_category == category_id)).first()
        return cls.from_row(row, db) if row else None

    @classmethod
    def find_by_nombre(cls, nombre: str, db: Database | None = None) -> "Category | None":
        db = db or get_database()
        row = db.query(select(categoria).where(categoria.c.nombre == nombre)).first()
        return cls.from_row(row, db) if row else None

    @classmethod
    def find_all(
        cls, limit: int | None = 50, offset: int = 0, db: Database | None = None
    ) -> list["Category"]:
        """Categories ordered by name."""
        db = db or get_database()
        stmt = (
            select(categoria)
            .order_by(categoria.c.nombre.asc())
            .limit(normalize_limit(limit))
            .offset(offset)
        )
        return [cls.from_row(row, db) for row in db.query(stmt)]

    @classmethod
    def search(
        cls, term: str, limit: int | None = 50, offset: int = 0, db: Database | None = None
    ) -> list["Category"]:
        """Case-insensitive substring match on name or description, ordered by name."""
        db = db or get_database()
        stmt = (
            select(categoria)
            .where(
                or_(
                    categoria.c.nombre.icontains(term, autoescape=True),
                    categoria.c.descripcion.icontains(term, autoescape=True),
                )
            )
            .order_by(categoria.c.nombre.asc())
            .limit(normalize_limit(limit))
            .offset(offset)
        )
        return [cls.from_row(row, db) for row in db.query(stmt)]

    @classmethod
    def count(cls, db: Database | None = None) -> int:
        db = db or get_database()
        return db.query(select(func.count()).select_from(categoria)).scalar() or 0

    def get_frases_count(self) -> int:
        category_id = self._require_id("count the quotes of")
        stmt = select(func.count()).select_from(frase).where(frase.c.categoria_id == category_id)
        return self.db.query(stmt).scalar() or 0

    def get_frases(self, limit: int | None = 50, offset: int = 0) -> list[Quote]:
        """Quotes of this category with creator and category names, newest first."""
        category_id = self._require_id("list the quotes of")
        return Quote.find_all({"categoria_id": category_id}, limit, offset, db=self.db)

    def get_stats(self) -> QuoteStats:
        category_id = self._require_id("compute statistics for")
        row = self.db.query(
            select(*quote_stats_columns()).where(frase.c.categoria_id == category_id)
        ).first()
        return QuoteStats.model_validate({key: value or 0 for key, value in row.items()})

    def to_dict(self) -> dict[str, Any]:
        return {
            "id_category": self.id_category,
            "nombre": self.nombre,
            "descripcion": self.descripcion,
        }
