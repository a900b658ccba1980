"""Statistics API endpoints."""

from fastapi import APIRouter

from gratiday.api.dependencies import DbDep
from gratiday.entities import Category, Quote, User
from gratiday.schemas.stats import CategoryStats, StatsOverview

router = APIRouter(prefix="/api/v1", tags=["stats"])


@router.get("/stats", response_model=StatsOverview)
def get_overview(db: DbDep):
    """Counts for users, categories and quotes, with a per-category breakdown."""
    por_categoria = [
        CategoryStats(
            id_category=category.id_category,
            nombre=category.nombre,
            **category.get_stats().model_dump(),
        )
        for category in Category.find_all(limit=None, db=db)
    ]
    return StatsOverview(
        total_usuarios=User.count(db=db),
        total_categorias=Category.count(db=db),
        frases=Quote.get_global_stats(db=db),
        por_categoria=por_categoria,
    )
