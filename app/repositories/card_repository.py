"""卡片（Card）数据访问层。"""
import uuid
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import storage_guard
from app.models.card import Card
from app.models.user import User


async def create_card(db: AsyncSession, *, owner_id: str, title: str, photo: str) -> Card:
    """创建卡片，ID 由服务端生成。"""
    card = Card(id=str(uuid.uuid4()), owner_id=owner_id, title=title, photo=photo)
    async with storage_guard(db, "create_card"):
        db.add(card)
        await db.commit()
        await db.refresh(card)
    return card


async def delete_card(db: AsyncSession, *, card_id: str, owner_id: str) -> bool:
    """只删除属于 owner_id 的卡片。返回是否真的删除了记录。"""
    async with storage_guard(db, "delete_card"):
        result = await db.execute(
            delete(Card).where(Card.id == card_id, Card.owner_id == owner_id)
        )
        await db.commit()
    return result.rowcount > 0


async def list_cards(db: AsyncSession) -> list[tuple[Card, User | None]]:
    """
    列出全部卡片及其作者。返回 [(card, owner)]，按创建时间倒序。
    """
    async with storage_guard(db, "list_cards"):
        result = await db.execute(
            select(Card, User)
            .outerjoin(User, Card.owner_id == User.id)
            .order_by(Card.created_at.desc(), Card.id)
        )
        return [(card, owner) for card, owner in result.all()]
