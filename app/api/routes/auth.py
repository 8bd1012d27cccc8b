"""注册与登录接口：POST /auth/sendMail、POST /auth/register、POST /auth/login。"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_pending_store, get_token_service
from app.core.db import get_db
from app.core.errors import (
    AlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidOrExpiredCodeError,
    UserNotFoundError,
)
from app.core.security import MAX_BCRYPT_PASSWORD_BYTES, password_too_long
from app.core.tokens import TokenService
from app.schemas.auth import (
    ConfirmRegisterRequest,
    ConfirmRegisterResponse,
    LoginRequest,
    SendMailRequest,
    SendMailResponse,
    TokenResponse,
)
from app.services.auth_service import login as login_user
from app.services.confirmation_store import PendingStore
from app.services.registration_service import confirm_registration, send_confirmation

router = APIRouter()

LOGIN_FAILED_DETAIL = "邮箱或密码错误"


def _ensure_password_length(password: str) -> None:
    if password_too_long(password):
        raise HTTPException(status_code=400, detail=f"密码过长（最多 {MAX_BCRYPT_PASSWORD_BYTES} 字节）")


@router.post("/sendMail", response_model=SendMailResponse)
async def send_mail(
    body: SendMailRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    store: PendingStore = Depends(get_pending_store),
):
    """发送注册确认邮件，同时把确认令牌直接返回给前端。"""
    _ensure_password_length(body.password)
    email = body.email.strip()
    try:
        result = await send_confirmation(
            db,
            username=body.name,
            email=email,
            password=body.password,
            tokens=tokens,
            store=store,
        )
    except AlreadyRegisteredError:
        raise HTTPException(status_code=400, detail="用户已存在")
    return SendMailResponse(result=result.token, emailSent=result.email_sent)


@router.post("/register", response_model=ConfirmRegisterResponse)
async def register(
    body: ConfirmRegisterRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    store: PendingStore = Depends(get_pending_store),
):
    """携带确认令牌完成注册。"""
    try:
        user = await confirm_registration(db, body.token.strip(), tokens=tokens, store=store)
    except InvalidOrExpiredCodeError:
        raise HTTPException(status_code=400, detail="验证码无效或已过期")
    except AlreadyRegisteredError:
        raise HTTPException(status_code=400, detail="用户已存在")
    return ConfirmRegisterResponse(id=user.id)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """登录：邮箱+密码，成功返回会话令牌。"""
    _ensure_password_length(body.password)
    try:
        result = await login_user(db, body.email.strip(), body.password, tokens=tokens)
    except (UserNotFoundError, InvalidCredentialsError):
        raise HTTPException(status_code=401, detail=LOGIN_FAILED_DETAIL)
    return TokenResponse(accessToken=result.access_token)
