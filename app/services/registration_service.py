"""注册确认流程：发送确认邮件 -> 用户携带确认令牌回来 -> 真正落库。

确认令牌里明文带着验证码，并且 /auth/sendMail 会把令牌直接返回给调用方，
所以邮件只是一种送达方式，并不是安全屏障。
"""
from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import (
    AlreadyRegisteredError,
    InvalidOrExpiredCodeError,
    StorageUnavailableError,
)
from app.core.security import hash_password
from app.core.tokens import TokenError, TokenService, claim_int, claim_str, minutes_or_none
from app.models.user import User
from app.repositories.user_repository import create_user, user_exists_by_email
from app.services.confirmation_store import PendingRegistration, PendingStore
from app.services.mail_service import send_email

logger = logging.getLogger(__name__)

CODE_MIN = 10000
CODE_MAX = 99999  # 不含
CONFIRMATION_SUBJECT = "注册确认"


@dataclass
class ConfirmationResult:
    token: str
    email_sent: bool


def generate_confirmation_code() -> int:
    """在 [10000, 99999) 内均匀生成 5 位验证码。"""
    return CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN)


def confirmation_link(token: str) -> str:
    return f"{settings.confirm_url_base}?code={token}"


def _confirmation_html(link: str) -> str:
    return (
        "<p>感谢注册，请点击下面的链接完成确认：</p>"
        f'<p><a href="{link}">{link}</a></p>'
    )


async def _deliver(email: str, token: str) -> bool:
    link = confirmation_link(token)
    try:
        return await asyncio.to_thread(send_email, email, CONFIRMATION_SUBJECT, _confirmation_html(link))
    except Exception:
        # 发信失败不影响待确认记录，调用方仍能拿到令牌
        logger.exception(f"confirmation mail delivery crashed for {email}")
        return False


async def send_confirmation(
    db: AsyncSession,
    *,
    username: str,
    email: str,
    password: str,
    tokens: TokenService,
    store: PendingStore,
) -> ConfirmationResult:
    """
    为未注册邮箱生成验证码、签发确认令牌、写入待确认记录并发信。
    待确认记录先于发信和返回写入，客户端拿到令牌后立即确认也不会扑空。
    """
    if await user_exists_by_email(db, email):
        raise AlreadyRegisteredError(email)

    code = generate_confirmation_code()
    token = tokens.issue_confirmation(
        email, code, minutes_or_none(settings.confirmation_token_expire_minutes)
    )
    store.put(email, PendingRegistration(email=email, username=username, password=password, code=code))
    logger.info(f"confirmation issued for {email}")

    email_sent = await _deliver(email, token)
    if not email_sent:
        logger.warning(f"confirmation mail not delivered to {email}, token returned to caller only")
    return ConfirmationResult(token=token, email_sent=email_sent)


async def confirm_registration(
    db: AsyncSession,
    token: str,
    *,
    tokens: TokenService,
    store: PendingStore,
) -> User:
    """校验确认令牌，验证码匹配则消费待确认记录并创建用户。每个验证码只能成功一次。"""
    try:
        claims = tokens.verify(token)
        email = claim_str(claims, "email")
        code = claim_int(claims, "code")
    except TokenError as exc:
        logger.debug(f"confirmation token rejected: {exc!r}")
        raise InvalidOrExpiredCodeError() from exc

    record = store.take(email, code)
    if record is None:
        raise InvalidOrExpiredCodeError()

    try:
        if await user_exists_by_email(db, email):
            raise AlreadyRegisteredError(email)
        password_hash = hash_password(record.password)
        user = await create_user(
            db, username=record.username, email=record.email, password_hash=password_hash
        )
    # 哈希失败或邮箱已注册时记录不放回，这两种情况重试也不会成功
    except StorageUnavailableError:
        # 数据库暂时不可用时放回记录，用户可以用同一个令牌重试
        store.restore(email, record)
        raise
    logger.info(f"user {user.id} registered via confirmation")
    return user
