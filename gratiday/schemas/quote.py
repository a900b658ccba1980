"""Quote schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class QuoteCreate(BaseModel):
    """Create a new quote."""

    texto: str
    autor: str | None = None
    scheduled_at: datetime | None = None
    status: str = "draft"
    creado_por: int
    categoria_id: int


class QuoteUpdate(BaseModel):
    """Fields of a quote that ``update`` may change.

    The creator is fixed once the quote exists.
    """

    model_config = ConfigDict(extra="forbid")

    texto: str | None = None
    autor: str | None = None
    scheduled_at: datetime | None = None
    status: str | None = None
    categoria_id: int | None = None


class QuoteSchedule(BaseModel):
    """Schedule a quote for later publication."""

    scheduled_at: datetime


class QuoteFilters(BaseModel):
    """Optional filters for listing and counting quotes; set fields are ANDed."""

    model_config = ConfigDict(extra="forbid")

    status: str | None = None
    categoria_id: int | None = None
    creado_por: int | None = None
    search: str | None = None


class QuoteResponse(BaseModel):
    """Quote response."""

    model_config = ConfigDict(from_attributes=True)

    id_quote: int
    texto: str
    autor: str | None
    fecha_creacion: datetime | None
    scheduled_at: datetime | None
    status: str
    creado_por: int
    categoria_id: int
    creado_por_nombre: str | None = None
    categoria_nombre: str | None = None
