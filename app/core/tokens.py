"""JWT 令牌的签发与校验。

会话令牌只携带 sub（用户 ID），确认令牌携带 email + code。
令牌是否有效只取决于签名（以及可选的 exp），服务端不保存任何会话记录。
"""
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidSignatureError, PyJWTError


class TokenError(Exception):
    """令牌校验失败的基类。"""


class MalformedTokenError(TokenError):
    """结构不合法、缺少 claim 或 claim 类型不对。"""


class InvalidSignatureTokenError(TokenError):
    """签名与密钥不匹配。"""


class TokenExpiredError(TokenError):
    """exp 已过期（仅在签发时设置了有效期才会出现）。"""


class MissingSecretError(RuntimeError):
    """未配置签名密钥。"""


def claim_str(claims: dict[str, Any], name: str) -> str:
    """按名字取字符串 claim，缺失或类型不对抛 MalformedTokenError。"""
    value = claims.get(name)
    if not isinstance(value, str) or not value:
        raise MalformedTokenError(f"claim {name!r} missing or not a string")
    return value


def claim_int(claims: dict[str, Any], name: str) -> int:
    """按名字取整数 claim，bool 不算整数。"""
    value = claims.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedTokenError(f"claim {name!r} missing or not an integer")
    return value


class TokenService:
    """进程内唯一的签名服务，创建后只读，可并发使用。"""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise MissingSecretError("JWT_SECRET is not configured")
        self._secret = secret
        self._algorithm = algorithm

    def issue(self, claims: dict[str, Any], validity: timedelta | None = None) -> str:
        """签发令牌。validity 为空时不写 exp。"""
        to_encode = dict(claims)
        if validity is not None:
            to_encode["exp"] = datetime.now(timezone.utc) + validity
        return jwt.encode(to_encode, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """校验签名并返回 claims。"""
        if not isinstance(token, str) or token.count(".") != 2:
            raise MalformedTokenError("token is not a three-part JWT")
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        # InvalidSignatureError 是 DecodeError 的子类，要先捕获
        except InvalidSignatureError as exc:
            raise InvalidSignatureTokenError("signature mismatch") from exc
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("token expired") from exc
        except PyJWTError as exc:
            raise MalformedTokenError(str(exc)) from exc

    def issue_session(self, user_id: str, validity: timedelta | None = None) -> str:
        return self.issue({"sub": str(user_id)}, validity)

    def issue_confirmation(self, email: str, code: int, validity: timedelta | None = None) -> str:
        return self.issue({"email": email, "code": code}, validity)


def minutes_or_none(minutes: int) -> timedelta | None:
    """配置里的分钟数转 timedelta，<= 0 视为不过期。"""
    if minutes <= 0:
        return None
    return timedelta(minutes=minutes)
