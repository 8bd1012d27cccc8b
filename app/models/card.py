from sqlalchemy import Column, ForeignKey, String

from app.models.base import TimestampMixin
from app.core.db import Base


class Card(Base, TimestampMixin):
    __tablename__ = "cards"

    id = Column(String(36), primary_key=True)
    owner_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    photo = Column(String(500), nullable=False, default="")
