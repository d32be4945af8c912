# carechat/users.py
import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carechat import models
from carechat.auth import hash_password, verify_password
from carechat.errors import Conflict, InvalidCredentials

logger = logging.getLogger(__name__)


def register_user(db: Session, username: str, email: str, password: str) -> models.User:
    # 用户名和邮箱都必须唯一
    exists = (
        db.query(models.User)
        .filter(or_(models.User.email == email, models.User.username == username))
        .first()
    )
    if exists:
        raise Conflict("User already exists")

    user = models.User(
        username=username,
        email=email,
        password_hash=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # 并发注册时由唯一约束兜底
        db.rollback()
        raise Conflict("User already exists")

    db.refresh(user)
    logger.info("registered user id=%s username=%s", user.id, user.username)
    return user


def authenticate_user(db: Session, email: str, password: str) -> models.User:
    user = db.query(models.User).filter(models.User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentials("Invalid credentials")
    return user
