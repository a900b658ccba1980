"""Quote model."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text

from gratiday.database import Base
from gratiday.models.enums import QUOTE_STATUSES
from gratiday.models.mixins import CreatedAtMixin


class QuoteModel(Base, CreatedAtMixin):
    """Gratitude quote with its publication state."""

    __tablename__ = "frase"

    id_quote = Column(Integer, primary_key=True, autoincrement=True)
    texto = Column(Text, nullable=False)
    autor = Column(String(120), nullable=True)
    scheduled_at = Column(DateTime(timezone=True), nullable=True, index=True)
    status = Column(
        Enum(*QUOTE_STATUSES, name="status"), nullable=False, server_default="draft", index=True
    )
    # No ON DELETE action: the store rejects orphaning quotes
    creado_por = Column(Integer, ForeignKey("usuario.id_user"), nullable=False, index=True)
    categoria_id = Column(Integer, ForeignKey("categoria.id_category"), nullable=False, index=True)
