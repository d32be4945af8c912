# carechat/models.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship, validates
from datetime import datetime, timezone

from carechat.db import Base

ROLES = ("user", "assistant")


def now_utc():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    history = relationship("ChatHistory", back_populates="user", uselist=False)


class ChatHistory(Base):
    """每个用户一条记录，消息按插入顺序保存"""

    __tablename__ = "chat_histories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    user = relationship("User", back_populates="history")
    messages = relationship(
        "ChatMessage",
        back_populates="history",
        cascade="all, delete-orphan",
        order_by="ChatMessage.id",
    )

    @validates("user_id")
    def _validate_user_id(self, key, value):
        # 归属用户一旦设置不可更改
        if self.user_id is not None and value != self.user_id:
            raise ValueError("chat history owner cannot be changed")
        return value


class ChatMessage(Base):
    __tablename__ = "chat_messages"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'assistant')", name="ck_chat_messages_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    history_id = Column(Integer, ForeignKey("chat_histories.id"), nullable=False, index=True)

    # "user" or "assistant"
    role = Column(String(16), nullable=False)

    content = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    history = relationship("ChatHistory", back_populates="messages")

    @validates("role")
    def _validate_role(self, key, value):
        if value not in ROLES:
            raise ValueError(f"unknown message role: {value!r}")
        return value
