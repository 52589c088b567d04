# app/utils/security.py
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from passlib.context import CryptContext

from app.utils.settings import (
    JWT_ACCESS_SECRET,
    JWT_REFRESH_SECRET,
    ACCESS_TOKEN_EXPIRES_MINUTES,
    REFRESH_TOKEN_EXPIRES_DAYS,
)

ALGORITHM = "HS256"

password_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return password_ctx.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return password_ctx.verify(password, hashed)


def _encode(user_id: UUID, role: str, token_type: str, secret: str, ttl: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "type": token_type,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def create_access_token(user_id: UUID, role: str) -> str:
    return _encode(
        user_id, role, "access", JWT_ACCESS_SECRET,
        timedelta(minutes=ACCESS_TOKEN_EXPIRES_MINUTES),
    )


def create_refresh_token(user_id: UUID, role: str) -> str:
    return _encode(
        user_id, role, "refresh", JWT_REFRESH_SECRET,
        timedelta(days=REFRESH_TOKEN_EXPIRES_DAYS),
    )


def decode_access_token(token: str) -> dict:
    """Rzuca jwt.PyJWTError gdy token jest niepoprawny lub wygasl."""
    payload = jwt.decode(token, JWT_ACCESS_SECRET, algorithms=[ALGORITHM])
    if payload.get("type") != "access":
        raise jwt.InvalidTokenError("Not an access token")
    return payload


def decode_refresh_token(token: str) -> dict:
    payload = jwt.decode(token, JWT_REFRESH_SECRET, algorithms=[ALGORITHM])
    if payload.get("type") != "refresh":
        raise jwt.InvalidTokenError("Not a refresh token")
    return payload
