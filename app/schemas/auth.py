"""认证相关请求/响应模型。"""
from pydantic import BaseModel, Field


class SendMailRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="用户名")
    email: str = Field(..., min_length=3, max_length=255, description="邮箱，登录与确认的唯一标识")
    password: str = Field(..., min_length=8, description="密码（至少 8 位）")


class SendMailResponse(BaseModel):
    result: str = Field(..., description="确认令牌，邮件发送失败时前端可直接使用")
    emailSent: bool = Field(..., description="确认邮件是否发送成功")


class ConfirmRegisterRequest(BaseModel):
    token: str = Field(..., description="确认链接中的 code 参数（确认令牌）")


class ConfirmRegisterResponse(BaseModel):
    id: str = Field(..., description="新用户 ID")
    message: str = Field("注册成功", description="提示信息")


class LoginRequest(BaseModel):
    email: str = Field(..., description="邮箱")
    password: str = Field(..., description="密码")


class TokenResponse(BaseModel):
    accessToken: str = Field(..., description="JWT 会话令牌")
