"""Entities of the data-access layer."""

from gratiday.entities.category import Category
from gratiday.entities.quote import Quote
from gratiday.entities.user import User

__all__ = ["User", "Category", "Quote"]
