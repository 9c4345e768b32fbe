from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from src.auth.schemas import TokenData
from src.config import settings
from src.exceptions import ForbiddenError

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` into an HS256 token that expires after ``expires_delta``"""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """Verify signature and expiry and return the identity claims.

    Raises ForbiddenError for anything that is not a valid, unexpired token
    carrying both ``id`` and ``email``.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise ForbiddenError("Token has expired")
    except jwt.PyJWTError:
        raise ForbiddenError("Invalid token")

    user_id = payload.get("id")
    email = payload.get("email")
    if user_id is None or email is None:
        raise ForbiddenError("Invalid token")

    return TokenData(id=user_id, email=email)
