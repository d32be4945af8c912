# carechat/schemas.py
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


class UserOut(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True  # Pydantic v2


class LoginResponse(BaseModel):
    token: str
    user: UserOut


class SessionUser(BaseModel):
    """token 中携带的身份信息"""
    user_id: int
    username: str


class ChatRequest(BaseModel):
    # 空字符串在 pipeline 里判断，返回 400 而不是校验错误
    message: str


class ChatResponse(BaseModel):
    response: str


class MessageOut(BaseModel):
    role: str
    content: str
    timestamp: datetime

    class Config:
        from_attributes = True


class HistoryResponse(BaseModel):
    messages: List[MessageOut]
