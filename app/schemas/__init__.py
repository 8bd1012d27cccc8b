"""API 请求/响应 Pydantic 模型。按模块组织，路由从本包或子模块导入。"""
from app.schemas.auth import (
    ConfirmRegisterRequest,
    ConfirmRegisterResponse,
    LoginRequest,
    SendMailRequest,
    SendMailResponse,
    TokenResponse,
)
from app.schemas.cards import CardCreateRequest, CardDeleteResponse, CardItem, CardOwner
from app.schemas.health import HealthResponse
from app.schemas.user import UserProfileResponse, UserProfileUpdate

__all__ = [
    "ConfirmRegisterRequest",
    "ConfirmRegisterResponse",
    "LoginRequest",
    "SendMailRequest",
    "SendMailResponse",
    "TokenResponse",
    "CardCreateRequest",
    "CardDeleteResponse",
    "CardItem",
    "CardOwner",
    "HealthResponse",
    "UserProfileResponse",
    "UserProfileUpdate",
]
