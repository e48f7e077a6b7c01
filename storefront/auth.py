# storefront/auth.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt

from . import config


def create_session_token(user_id: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=config.SESSION_MAX_AGE_DAYS)
    return jwt.encode({"sub": user_id, "exp": expire}, config.SESSION_SECRET,
                      algorithm=config.SESSION_ALGORITHM)


def new_session_token() -> str:
    return create_session_token(uuid.uuid4().hex)


def decode_session_token(token: str) -> Optional[str]:
    try:
        payload = jwt.decode(token, config.SESSION_SECRET, algorithms=[config.SESSION_ALGORITHM])
    except JWTError:
        return None
    sub = payload.get("sub")
    return sub or None


def user_from_request(request: Request) -> Optional[str]:
    """Пользователь из заголовка Authorization или из cookie сессии. None если токена нет
    или он невалиден.
    """
    token = None
    auth = request.headers.get("Authorization")
    if auth and auth.lower().startswith("bearer "):
        token = auth.split(None, 1)[1].strip()
    if not token:
        token = request.cookies.get(config.SESSION_COOKIE)
    if not token:
        return None
    return decode_session_token(token)


async def get_user_id(request: Request) -> str:
    # anonymous callers share the default cart
    return user_from_request(request) or config.DEFAULT_USER
