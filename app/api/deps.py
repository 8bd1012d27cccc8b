"""API 依赖项：令牌服务、待确认存储、鉴权与当前用户。"""
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.errors import UnauthorizedError
from app.core.tokens import TokenService
from app.models.user import User
from app.repositories.user_repository import get_user_by_id
from app.services.auth_service import authenticate
from app.services.confirmation_store import PendingStore

_bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED_DETAIL = "未登录或 token 无效"


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_pending_store(request: Request) -> PendingStore:
    return request.app.state.pending_store


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """从 Authorization: Bearer <token> 中解析用户 ID，失败统一 401。"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail=UNAUTHORIZED_DETAIL)
    try:
        return authenticate(credentials.credentials, tokens=tokens)
    except UnauthorizedError:
        raise HTTPException(status_code=401, detail=UNAUTHORIZED_DETAIL)


async def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    """令牌合法但用户已不存在时同样返回 401。"""
    user = await get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=401, detail=UNAUTHORIZED_DETAIL)
    return user
