from app.core.db import Base
from app.models.base import TimestampMixin
from app.models.user import User
from app.models.card import Card

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Card",
]
