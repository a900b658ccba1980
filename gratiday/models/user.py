"""User model."""

from sqlalchemy import Column, Enum, Integer, String

from gratiday.database import Base
from gratiday.models.enums import USER_ROLES
from gratiday.models.mixins import CreatedAtMixin


class UserModel(Base, CreatedAtMixin):
    """Account that owns quotes."""

    __tablename__ = "usuario"

    id_user = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(100), nullable=False)
    correo_electronico = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    rol = Column(Enum(*USER_ROLES, name="rol"), nullable=False, server_default="user")
