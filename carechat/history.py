# carechat/history.py
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carechat import models


def _get_or_create_history(db: Session, user_id: int) -> models.ChatHistory:
    history = (
        db.query(models.ChatHistory)
        .filter(models.ChatHistory.user_id == user_id)
        .first()
    )
    if history:
        return history

    history = models.ChatHistory(user_id=user_id)
    db.add(history)
    try:
        db.flush()
    except IntegrityError:
        # 另一个请求先插入了：回滚后重新读取
        db.rollback()
        history = (
            db.query(models.ChatHistory)
            .filter(models.ChatHistory.user_id == user_id)
            .one()
        )
    return history


def append_exchange(db: Session, user_id: int, user_message: str, assistant_reply: str) -> None:
    """追加一问一答两条消息，时间戳相同"""
    history = _get_or_create_history(db, user_id)
    now = models.now_utc()
    db.add(models.ChatMessage(history_id=history.id, role="user", content=user_message, timestamp=now))
    db.add(models.ChatMessage(history_id=history.id, role="assistant", content=assistant_reply, timestamp=now))
    db.commit()


def fetch_messages(db: Session, user_id: int) -> List[models.ChatMessage]:
    # 没有记录时返回空列表
    return (
        db.query(models.ChatMessage)
        .join(models.ChatHistory)
        .filter(models.ChatHistory.user_id == user_id)
        .order_by(models.ChatMessage.id)
        .all()
    )


def clear_history(db: Session, user_id: int) -> None:
    history = _get_or_create_history(db, user_id)
    db.query(models.ChatMessage).filter(
        models.ChatMessage.history_id == history.id
    ).delete(synchronize_session=False)
    db.commit()
