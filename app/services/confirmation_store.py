"""待确认注册记录的内存存储。

记录按邮箱存放，直到用户用确认令牌完成注册为止。存储只在当前进程内有效：
进程重启后所有未完成的确认都会丢失，用户需要重新请求确认邮件。记录没有过期时间。
"""
import threading
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class PendingRegistration:
    email: str
    username: str
    password: str
    code: int


class PendingStore(Protocol):
    def put(self, email: str, record: PendingRegistration) -> None: ...

    def get(self, email: str) -> PendingRegistration | None: ...

    def take(self, email: str, code: int) -> PendingRegistration | None: ...

    def restore(self, email: str, record: PendingRegistration) -> None: ...


class InMemoryPendingStore:
    """dict + 单把锁。锁只包住字典读写，绝不在持锁期间做 I/O 或 await。"""

    def __init__(self) -> None:
        self._records: dict[str, PendingRegistration] = {}
        self._lock = threading.Lock()

    def put(self, email: str, record: PendingRegistration) -> None:
        """插入或覆盖。重复请求确认邮件时旧验证码作废。"""
        with self._lock:
            self._records[email] = record

    def get(self, email: str) -> PendingRegistration | None:
        with self._lock:
            return self._records.get(email)

    def take(self, email: str, code: int) -> PendingRegistration | None:
        """验证码一致时取出并删除记录，否则返回 None 且不改动存储。"""
        with self._lock:
            record = self._records.get(email)
            if record is None or record.code != code:
                return None
            del self._records[email]
            return record

    def restore(self, email: str, record: PendingRegistration) -> None:
        """落库失败时放回记录；期间已有新记录则保留新的。"""
        with self._lock:
            self._records.setdefault(email, record)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
