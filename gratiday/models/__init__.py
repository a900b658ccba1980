"""SQLAlchemy models."""

from gratiday.models.category import CategoryModel
from gratiday.models.enums import QUOTE_STATUSES, USER_ROLES, QuoteStatus, UserRole
from gratiday.models.quote import QuoteModel
from gratiday.models.user import UserModel

usuario = UserModel.__table__
categoria = CategoryModel.__table__
frase = QuoteModel.__table__

__all__ = [
    "UserModel",
    "CategoryModel",
    "QuoteModel",
    "UserRole",
    "QuoteStatus",
    "USER_ROLES",
    "QUOTE_STATUSES",
    "usuario",
    "categoria",
    "frase",
]
