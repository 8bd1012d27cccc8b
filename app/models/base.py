from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func

from app.core.db import Base


class TimestampMixin:
    """created_at 建了索引，卡片列表按它倒序。"""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
