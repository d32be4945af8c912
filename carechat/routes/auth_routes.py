# carechat/routes/auth_routes.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from carechat.auth import create_token
from carechat.db import get_db
from carechat.errors import CareChatError, ServerError
from carechat.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserOut,
)
from carechat.users import authenticate_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", status_code=201, response_model=MessageResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    try:
        register_user(db, payload.username, payload.email, payload.password)
    except CareChatError:
        raise
    except Exception:
        logger.exception("registration failed")
        raise ServerError("Server error")

    return {"message": "User created successfully"}


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = authenticate_user(db, payload.email, payload.password)
        token = create_token(user.id, user.username)
    except CareChatError:
        raise
    except Exception:
        logger.exception("login failed")
        raise ServerError("Server error")

    return LoginResponse(token=token, user=UserOut.model_validate(user))
