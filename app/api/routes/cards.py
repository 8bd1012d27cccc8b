"""卡片：GET/POST /api/cards、DELETE /api/cards/{card_id}。"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.core.db import get_db
from app.models.card import Card
from app.models.user import User
from app.repositories.card_repository import create_card, delete_card, list_cards
from app.schemas.cards import CardCreateRequest, CardDeleteResponse, CardItem, CardOwner

router = APIRouter()


def _card_to_item(card: Card, owner: User | None = None) -> CardItem:
    owner_item = None
    if owner is not None:
        owner_item = CardOwner(userId=owner.id, name=owner.username or "", avatar=owner.avatar)
    return CardItem(cardId=card.id, title=card.title, photo=card.photo or "", owner=owner_item)


@router.get("/cards", response_model=list[CardItem])
async def get_all_cards(db: AsyncSession = Depends(get_db)):
    """所有卡片（公开），带作者用户名与头像。"""
    rows = await list_cards(db)
    return [_card_to_item(card, owner) for card, owner in rows]


@router.post("/cards", response_model=CardItem)
async def create_new_card(
    body: CardCreateRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    card = await create_card(db, owner_id=user.id, title=body.title, photo=body.photo)
    return _card_to_item(card)


@router.delete("/cards/{card_id}", response_model=CardDeleteResponse)
async def remove_card(
    card_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """只能删除自己的卡片。"""
    deleted = await delete_card(db, card_id=card_id, owner_id=user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="卡片不存在")
    return CardDeleteResponse()
