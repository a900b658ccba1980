"""FastAPI dependencies for loading entities."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from gratiday.database import Database, get_db
from gratiday.entities import Category, Quote, User

DbDep = Annotated[Database, Depends(get_db)]


def get_user_or_404(user_id: int, db: DbDep) -> User:
    """Load a user or fail with 404."""
    user = User.find_by_id(user_id, db=db)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def get_category_or_404(category_id: int, db: DbDep) -> Category:
    """Load a category or fail with 404."""
    category = Category.find_by_id(category_id, db=db)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


def get_quote_or_404(quote_id: int, db: DbDep) -> Quote:
    """Load a quote with creator and category names or fail with 404."""
    quote = Quote.find_by_id(quote_id, include_details=True, db=db)
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quote not found")
    return quote
