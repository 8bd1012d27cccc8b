"""业务异常。路由层负责把它们映射成 HTTP 响应，对外只暴露笼统的提示。"""


class ServiceError(Exception):
    """所有业务异常的基类。"""


class AlreadyRegisteredError(ServiceError):
    """邮箱已被注册。"""


class InvalidCredentialsError(ServiceError):
    """密码不匹配。"""


class UserNotFoundError(ServiceError):
    """按邮箱找不到用户。"""


class UnauthorizedError(ServiceError):
    """令牌缺失、被篡改、过期或 claims 不合法。具体原因只写日志。"""


class InvalidOrExpiredCodeError(ServiceError):
    """确认令牌无效、验证码不匹配或待确认记录不存在（包括已被使用）。"""


class HashingError(ServiceError):
    """密码哈希底层失败，按内部错误处理，不重试。"""


class StorageUnavailableError(ServiceError):
    """数据库访问失败，按临时性内部错误处理。"""
