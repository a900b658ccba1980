"""Category model."""

from sqlalchemy import Column, Integer, String

from gratiday.database import Base


class CategoryModel(Base):
    """Topical grouping for quotes."""

    __tablename__ = "categoria"

    id_category = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(80), unique=True, nullable=False)
    descripcion = Column(String(255), nullable=True)
