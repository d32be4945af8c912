# carechat/auth.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Header
from jose import JWTError, jwt
from passlib.context import CryptContext

from carechat.config import JWT_ALGORITHM, JWT_SECRET, TOKEN_EXPIRE_HOURS
from carechat.errors import Forbidden, Unauthenticated
from carechat.schemas import SessionUser

logger = logging.getLogger(__name__)

# bcrypt，cost factor 10
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_token(
    user_id: int,
    username: str,
    secret: str = JWT_SECRET,
    issued_at: Optional[datetime] = None,
) -> str:
    """签发 24 小时有效的 JWT，服务端不保存任何状态"""
    issued_at = issued_at or datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "username": username,
        "exp": issued_at + timedelta(hours=TOKEN_EXPIRE_HOURS),
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: Optional[str], secret: str = JWT_SECRET) -> SessionUser:
    """
    校验签名和过期时间。
    缺少 token -> Unauthenticated (401)；签名错误/过期/格式不对 -> Forbidden (403)
    """
    if not token:
        raise Unauthenticated("Access token required")

    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        return SessionUser(user_id=int(payload["sub"]), username=payload["username"])
    except (JWTError, KeyError, ValueError) as e:
        logger.info("rejected session token: %s", e)
        raise Forbidden("Invalid token")


def get_current_user(authorization: str | None = Header(default=None)) -> SessionUser:
    """
    FastAPI 依赖：解析 Authorization: Bearer <token>
    """
    parts = (authorization or "").split()
    token = parts[1] if len(parts) > 1 else None
    return decode_token(token)
