"""User entity: accounts, credentials and authentication."""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, insert, select, update

from gratiday.database import Database, get_database
from gratiday.entities.base import Entity, enum_value, from_store_timestamp, normalize_limit
from gratiday.errors import ValidationError, integrity_errors
from gratiday.models import usuario
from gratiday.models.enums import UserRole
from gratiday.schemas.user import UserUpdate
from gratiday.services.auth import get_password_hash
from gratiday.services.auth import verify_password as _verify_password
from gratiday.validation import PASSWORD_MIN_LENGTH, ValidationResult, is_valid_email, validate_user

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Email address is already registered"


class User(Entity):
    """An account that can author quotes."""

    entity_name = "user"
    id_field = "id_user"
    patch_model = UserUpdate

    def __init__(
        self,
        nombre: str = "",
        correo_electronico: str = "",
        password_hash: str = "",
        rol: str | UserRole = UserRole.USER,
        fecha_creacion: datetime | None = None,
        id_user: int | None = None,
        db: Database | None = None,
    ):
        super().__init__(db, id_user)
        self.nombre = nombre
        self.correo_electronico = correo_electronico
        self.password_hash = password_hash
        self.rol = enum_value(rol)
        self.fecha_creacion = from_store_timestamp(fecha_creacion)

    @property
    def id_user(self) -> int | None:
        return self._id

    @classmethod
    def from_row(cls, row: Mapping[str, Any], db: Database | None = None) -> "User":
        return cls(
            nombre=row["nombre"],
            correo_electronico=row["correo_electronico"],
            password_hash=row["password_hash"],
            rol=row["rol"],
            fecha_creacion=row.get("fecha_creacion"),
            id_user=row["id_user"],
            db=db,
        )

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    @staticmethod
    def hash_password(password: str) -> str:
        """Return ``salt:hash`` for ``password``; a new salt is drawn on every call."""
        return get_password_hash(password)

    @staticmethod
    def verify_password(password: str, stored_hash: str | None) -> bool:
        return _verify_password(password, stored_hash)

    @staticmethod
    def is_valid_email(email: str) -> bool:
        return is_valid_email(email)

    def validate(self, password: str | None = None) -> ValidationResult:
        """Validate the account fields.

        ``password`` is the plaintext about to be hashed; without it the stored
        hash is checked instead.
        """
        return validate_user(
            nombre=self.nombre,
            correo_electronico=self.correo_electronico,
            password=password if password is not None else self.password_hash,
            rol=self.rol,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, password: str) -> "User":
        """Hash ``password`` and insert the account."""
        self._raise_if_invalid(self.validate(password))

        password_hash = self.hash_password(password)
        with integrity_errors(duplicate=DUPLICATE_EMAIL):
            result = self.db.query(
                insert(usuario).values(
                    nombre=self.nombre,
                    correo_electronico=self.correo_electronico,
                    password_hash=password_hash,
                    rol=self.rol,
                )
            )
        self._assign_id(result.lastrowid)
        self.password_hash = password_hash
        self.fecha_creacion = from_store_timestamp(
            self.db.query(
                select(usuario.c.fecha_creacion).where(usuario.c.id_user == self._id)
            ).scalar()
        )
        logger.info(f"Created user {self._id}")
        return self

    def update(self, fields: UserUpdate | Mapping[str, Any] | None = None) -> "User":
        """Apply a patch of name/email/role, re-validate and persist.

        Passwords change only through :meth:`update_password`.
        """
        user_id = self._require_id("update")
        changes = self._coerce_patch(fields)
        merged = {
            "nombre": self.nombre,
            "correo_electronico": self.correo_electronico,
            "rol": self.rol,
            **changes,
        }
        self._raise_if_invalid(validate_user(password=self.password_hash, **merged))

        with integrity_errors(duplicate=DUPLICATE_EMAIL):
            self.db.query(update(usuario).where(usuario.c.id_user == user_id).values(**merged))
        self.nombre = merged["nombre"]
        self.correo_electronico = merged["correo_electronico"]
        self.rol = merged["rol"]
        return self

    def update_password(self, new_password: str) -> "User":
        user_id = self._require_id("change the password of")
        if not new_password or len(new_password) < PASSWORD_MIN_LENGTH:
            raise ValidationError([f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"])

        password_hash = self.hash_password(new_password)
        self.db.query(
            update(usuario).where(usuario.c.id_user == user_id).values(password_hash=password_hash)
        )
        self.password_hash = password_hash
        logger.info(f"Password changed for user {user_id}")
        return self

    def delete(self) -> bool:
        """Delete the account. Returns whether a row was removed."""
        user_id = self._require_id("delete")
        with integrity_errors(dependency="User cannot be deleted while quotes reference it"):
            result = self.db.query(delete(usuario).where(usuario.c.id_user == user_id))
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @classmethod
    def find_by_id(cls, user_id: int, db: Database | None = None) -> "User | None":
        db = db or get_database()
        row = db.query(select(usuario).where(usuario.c.id_user == user_id)).first()
        return cls.from_row(row, db) if row else None

    @classmethod
    def find_by_email(cls, email: str, db: Database | None = None) -> "User | None":
        db = db or get_database()
        row = db.query(select(usuario).where(usuario.c.correo_electronico == email)).first()
        return cls.from_row(row, db) if row else None

    @classmethod
    def find_all(
        cls, limit: int | None = 50, offset: int = 0, db: Database | None = None
    ) -> list["User"]:
        """Accounts, newest first."""
        db = db or get_database()
        stmt = (
            select(usuario)
            .order_by(usuario.c.fecha_creacion.desc(), usuario.c.id_user.desc())
            .limit(normalize_limit(limit))
            .offset(offset)
        )
        return [cls.from_row(row, db) for row in db.query(stmt)]

    @classmethod
    def count(cls, db: Database | None = None) -> int:
        db = db or get_database()
        return db.query(select(func.count()).select_from(usuario)).scalar() or 0

    @classmethod
    def authenticate(cls, email: str, password: str, db: Database | None = None) -> "User | None":
        """Return the account if the credentials match, otherwise ``None``."""
        user = cls.find_by_email(email, db=db)
        if user is None:
            return None
        if not cls.verify_password(password, user.password_hash):
            logger.info(f"Failed login for user {user.id_user}")
            return None
        return user

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for external consumers, without the password hash."""
        return {
            "id_user": self.id_user,
            "nombre": self.nombre,
            "correo_electronico": self.correo_electronico,
            "fecha_creacion": self.fecha_creacion,
            "rol": self.rol,
        }
