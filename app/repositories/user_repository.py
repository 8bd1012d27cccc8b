import uuid
from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import storage_guard
from app.core.errors import AlreadyRegisteredError
from app.models.user import User


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """按邮箱查询用户，不存在返回 None。"""
    async with storage_guard(db, "get_user_by_email"):
        result = await db.execute(select(User).where(User.email == email))
        return result.scalars().first()


async def user_exists_by_email(db: AsyncSession, email: str) -> bool:
    """发送确认邮件前检查邮箱是否已注册。"""
    async with storage_guard(db, "user_exists_by_email"):
        result = await db.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    """按用户 ID 查询用户，不存在返回 None。"""
    async with storage_guard(db, "get_user_by_id"):
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalars().first()


async def create_user(
    db: AsyncSession,
    *,
    username: str,
    email: str,
    password_hash: str,
) -> User:
    """创建新用户。邮箱冲突时抛 AlreadyRegisteredError。"""
    user = User(
        id=str(uuid.uuid4()),
        username=username,
        email=email,
        password_hash=password_hash,
    )
    async with storage_guard(db, "create_user"):
        db.add(user)
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            raise AlreadyRegisteredError(email) from exc
        await db.refresh(user)
    return user


async def update_user(db: AsyncSession, user: User) -> User:
    """提交对 user 的修改并刷新对象。"""
    async with storage_guard(db, "update_user"):
        await db.commit()
        await db.refresh(user)
    return user
