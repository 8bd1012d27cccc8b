"""登录与令牌鉴权。"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import InvalidCredentialsError, UnauthorizedError, UserNotFoundError
from app.core.security import verify_password
from app.core.tokens import MalformedTokenError, TokenError, TokenService, claim_str, minutes_or_none
from app.models.user import User
from app.repositories.user_repository import get_user_by_email

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user: User
    access_token: str


async def login(db: AsyncSession, email: str, password: str, *, tokens: TokenService) -> LoginResult:
    """邮箱 + 密码登录，成功签发会话令牌（sub 为用户 ID）。"""
    user = await get_user_by_email(db, email)
    if user is None:
        raise UserNotFoundError(email)
    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError(email)
    token = tokens.issue_session(user.id, minutes_or_none(settings.access_token_expire_minutes))
    return LoginResult(user=user, access_token=token)


def authenticate(token: str, *, tokens: TokenService) -> str:
    """校验会话令牌并返回用户 ID。任何失败都统一成 UnauthorizedError。"""
    try:
        claims = tokens.verify(token)
        user_id = claim_str(claims, "sub")
        try:
            uuid.UUID(user_id)
        except ValueError as exc:
            raise MalformedTokenError("sub is not a UUID") from exc
    except TokenError as exc:
        logger.debug(f"session token rejected: {exc!r}")
        raise UnauthorizedError() from exc
    return user_id
