"""GratiDay data-access layer: users, categories and gratitude quotes."""

from gratiday.database import Database, QueryResult, get_database, init_db
from gratiday.entities import Category, Quote, User
from gratiday.errors import (
    DatabaseConnectionError,
    DependencyError,
    DuplicateError,
    GratidayError,
    QueryError,
    ReferenceNotFoundError,
    StateError,
    ValidationError,
)

__all__ = [
    "Database",
    "QueryResult",
    "get_database",
    "init_db",
    "User",
    "Category",
    "Quote",
    "GratidayError",
    "ValidationError",
    "DuplicateError",
    "ReferenceNotFoundError",
    "DependencyError",
    "StateError",
    "DatabaseConnectionError",
    "QueryError",
]
