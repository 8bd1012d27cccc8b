"""密码哈希与校验。"""
import logging

from passlib.context import CryptContext

from app.core.errors import HashingError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MAX_BCRYPT_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    """bcrypt 限制 72 bytes，超过会抛异常。"""
    return len(password.encode("utf-8")) > MAX_BCRYPT_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """对明文密码做 bcrypt 哈希（自带盐，相同输入每次结果不同）。"""
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as exc:
        logger.exception("bcrypt hash failed")
        raise HashingError("密码哈希失败") from exc


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """用 passlib 自己的比较原语校验明文密码与哈希是否一致。"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # 库里存的哈希格式不对，当作不匹配
        logger.warning("stored password hash is not a valid bcrypt hash")
        return False
