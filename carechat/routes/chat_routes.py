# carechat/routes/chat_routes.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from carechat import history
from carechat.auth import get_current_user
from carechat.db import get_db
from carechat.errors import CareChatError, ServerError
from carechat.llm import CompletionGateway, get_gateway
from carechat.pipeline import process_chat_message
from carechat.schemas import (
    ChatRequest,
    ChatResponse,
    HistoryResponse,
    MessageResponse,
    SessionUser,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ChatResponse)  # main.py 里 prefix="/api/chat"，所以这里就是 POST /api/chat
def chat(
    payload: ChatRequest,
    user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: CompletionGateway = Depends(get_gateway),
):
    try:
        reply = process_chat_message(db, user, payload.message, gateway)
    except CareChatError:
        raise
    except Exception:
        logger.exception("chat error")
        raise ServerError("Failed to process chat message. Please try again.")

    return {"response": reply}


@router.get("/history", response_model=HistoryResponse)  # GET /api/chat/history
def get_history(
    user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        messages = history.fetch_messages(db, user.user_id)
    except Exception:
        logger.exception("failed to fetch chat history")
        raise ServerError("Failed to fetch chat history")

    return {"messages": messages}


@router.delete("/history", response_model=MessageResponse)  # DELETE /api/chat/history
def delete_history(
    user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        history.clear_history(db, user.user_id)
    except Exception:
        logger.exception("failed to clear chat history")
        db.rollback()
        raise ServerError("Failed to clear chat history")

    return {"message": "Chat history cleared"}
