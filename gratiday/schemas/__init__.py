"""Pydantic schemas for entity patches, filters and API payloads."""

from gratiday.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from gratiday.schemas.quote import (
    QuoteCreate,
    QuoteFilters,
    QuoteResponse,
    QuoteSchedule,
    QuoteUpdate,
)
from gratiday.schemas.stats import CategoryStats, GlobalQuoteStats, QuoteStats, StatsOverview
from gratiday.schemas.user import PasswordChange, UserCreate, UserLogin, UserResponse, UserUpdate

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserLogin",
    "UserResponse",
    "PasswordChange",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "QuoteCreate",
    "QuoteUpdate",
    "QuoteSchedule",
    "QuoteFilters",
    "QuoteResponse",
    "QuoteStats",
    "GlobalQuoteStats",
    "CategoryStats",
    "StatsOverview",
]
