"""Statistics schemas."""

from pydantic import BaseModel


class QuoteStats(BaseModel):
    """Quote counts broken down by status."""

    total_frases: int = 0
    frases_publicadas: int = 0
    frases_borrador: int = 0
    frases_programadas: int = 0


class GlobalQuoteStats(QuoteStats):
    """Quote counts for the whole store."""

    usuarios_activos: int = 0
    categorias_usadas: int = 0


class CategoryStats(QuoteStats):
    """Quote counts for one category."""

    id_category: int
    nombre: str


class StatsOverview(BaseModel):
    """Store-wide dashboard numbers."""

    total_usuarios: int
    total_categorias: int
    frases: GlobalQuoteStats
    por_categoria: list[CategoryStats]
