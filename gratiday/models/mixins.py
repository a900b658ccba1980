"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, func


class CreatedAtMixin:
    """Mixin to add the server-assigned ``fecha_creacion`` column."""

    fecha_creacion = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
