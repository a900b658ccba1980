"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from gratiday.api.dependencies import DbDep, get_category_or_404
from gratiday.entities import Category
from gratiday.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from gratiday.schemas.quote import QuoteResponse
from gratiday.schemas.stats import QuoteStats

router = APIRouter(prefix="/api/v1", tags=["categories"])


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(
    db: DbDep,
    q: str | None = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List categories by name, or search name and description when ``q`` is given."""
    if q:
        return Category.search(q, limit, offset, db=db)
    return Category.find_all(limit, offset, db=db)


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(category_data: CategoryCreate, db: DbDep):
    """Create a new category."""
    category = Category(nombre=category_data.nombre, descripcion=category_data.descripcion, db=db)
    return category.create()


@router.get("/categories/by-name", response_model=CategoryResponse)
def get_category_by_name(nombre: str, db: DbDep):
    """Look up a category by its exact name."""
    category = Category.find_by_nombre(nombre, db=db)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category(category: Annotated[Category, Depends(get_category_or_404)]):
    """Get a category."""
    return category


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_data: CategoryUpdate,
    category: Annotated[Category, Depends(get_category_or_404)],
):
    """Update a category."""
    return category.update(category_data)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category: Annotated[Category, Depends(get_category_or_404)],
    force: bool = False,
):
    """Delete a category. With ``force`` its quotes are deleted too."""
    category.delete(force_delete=force)


@router.get("/categories/{category_id}/quotes", response_model=list[QuoteResponse])
def get_category_quotes(
    category: Annotated[Category, Depends(get_category_or_404)],
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """Quotes of a category, newest first."""
    return category.get_frases(limit, offset)


@router.get("/categories/{category_id}/stats", response_model=QuoteStats)
def get_category_stats(category: Annotated[Category, Depends(get_category_or_404)]):
    """Quote counts for a category."""
    return category.get_stats()
