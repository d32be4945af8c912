# carechat/pipeline.py
"""
一轮对话：校验 -> 话题过滤 -> 生成回复 -> 落库。

鉴权在路由依赖里已经完成。被话题过滤拒绝的消息直接返回 REFUSAL_REPLY，
不调用模型，也不写聊天记录。
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from carechat import history
from carechat.errors import BadRequest, PersistenceFailure
from carechat.llm import CompletionGateway
from carechat.schemas import SessionUser
from carechat.topic_filter import is_healthcare_related

logger = logging.getLogger(__name__)

REFUSAL_REPLY = "I'm a healthcare assistant and can only help with health-related questions."


def process_chat_message(
    db: Session,
    user: SessionUser,
    message: str,
    gateway: CompletionGateway,
) -> str:
    if not message or not message.strip():
        raise BadRequest("Message cannot be empty")

    if not is_healthcare_related(message):
        logger.info("off-topic message from user id=%s rejected", user.user_id)
        return REFUSAL_REPLY

    reply = gateway.complete(message)

    # 回复已生成，但落库失败仍然返回 500
    try:
        history.append_exchange(db, user.user_id, message, reply)
    except SQLAlchemyError:
        logger.exception("failed to persist chat turn for user id=%s", user.user_id)
        db.rollback()
        raise PersistenceFailure("Failed to process chat message. Please try again.")

    return reply
