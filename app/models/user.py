from sqlalchemy import Column, String, Text

from app.models.base import TimestampMixin
from app.core.db import Base


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(100), nullable=False)
    # 登录与注册确认都以邮箱为准，唯一性由数据库保证
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    avatar = Column(String(500), nullable=True)
