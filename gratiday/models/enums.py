"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Account roles."""

    ADMIN = "admin"
    USER = "user"


class QuoteStatus(str, Enum):
    """Publication lifecycle of a quote."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


USER_ROLES = tuple(role.value for role in UserRole)
QUOTE_STATUSES = tuple(status.value for status in QuoteStatus)
