"""个人资料相关请求/响应模型。"""
from pydantic import BaseModel, Field


class UserProfileResponse(BaseModel):
    userId: str = Field(..., description="用户 ID")
    name: str = Field("", description="用户名")
    email: str = Field("", description="邮箱")
    description: str | None = Field(None, description="个人简介")
    avatar: str | None = Field(None, description="头像地址")


class UserProfileUpdate(BaseModel):
    """只更新传入的字段。"""
    name: str | None = Field(None, min_length=1, max_length=100, description="用户名")
    description: str | None = Field(None, description="个人简介")
    avatar: str | None = Field(None, max_length=500, description="头像地址")
