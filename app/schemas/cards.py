"""卡片相关请求/响应模型。"""
from pydantic import BaseModel, Field


class CardCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, description="标题")
    photo: str = Field("", max_length=500, description="图片地址")


class CardOwner(BaseModel):
    userId: str
    name: str = ""
    avatar: str | None = None


class CardItem(BaseModel):
    cardId: str
    title: str
    photo: str = ""
    owner: CardOwner | None = None


class CardDeleteResponse(BaseModel):
    status: str = "OK"
