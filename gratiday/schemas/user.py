"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Create a new account."""

    nombre: str
    correo_electronico: str
    password: str
    rol: str = "user"


class UserUpdate(BaseModel):
    """Fields of an account that ``update`` may change."""

    model_config = ConfigDict(extra="forbid")

    nombre: str | None = None
    correo_electronico: str | None = None
    rol: str | None = None


class PasswordChange(BaseModel):
    """Replace an account's password."""

    password: str


class UserLogin(BaseModel):
    """Login request."""

    correo_electronico: str
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User information response. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id_user: int
    nombre: str
    correo_electronico: str
    fecha_creacion: datetime | None
    rol: str
