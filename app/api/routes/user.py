"""个人中心：用户资料 GET/PUT /api/user/profile。"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.core.db import get_db
from app.models.user import User
from app.repositories.user_repository import update_user
from app.schemas.user import UserProfileResponse, UserProfileUpdate

router = APIRouter()


def _user_to_profile_response(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        userId=user.id,
        name=user.username or "",
        email=user.email or "",
        description=user.description,
        avatar=user.avatar,
    )


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(user: User = Depends(get_current_user)):
    """获取当前用户个人资料。"""
    return _user_to_profile_response(user)


@router.put("/profile", response_model=UserProfileResponse)
async def update_profile(
    body: UserProfileUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """更新当前用户个人资料。"""
    if body.name is not None:
        user.username = body.name
    if body.description is not None:
        user.description = body.description
    if body.avatar is not None:
        user.avatar = body.avatar
    user = await update_user(db, user)
    return _user_to_profile_response(user)
