"""Category schemas."""

from pydantic import BaseModel, ConfigDict


class CategoryCreate(BaseModel):
    """Create a new category."""

    nombre: str
    descripcion: str | None = None


class CategoryUpdate(BaseModel):
    """Update a category."""

    model_config = ConfigDict(extra="forbid")

    nombre: str | None = None
    descripcion: str | None = None


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id_category: int
    nombre: str
    descripcion: str | None
