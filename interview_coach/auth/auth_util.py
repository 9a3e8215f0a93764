"""
This module provides utilities for authentication.
"""
import logging
import os
from datetime import datetime, timezone, timedelta

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from interview_coach.db import get_db
from interview_coach.db.models_user import User

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# pbkdf2_sha256 ships with passlib itself and needs no native backend.
CRYPT_CONTEXT = CryptContext(
    schemes=["pbkdf2_sha256"],
    default="pbkdf2_sha256",
)
JWT_ALGORITHM = "HS256"
DEFAULT_EXP_MINUTES = 480

bearer_scheme = HTTPBearer(auto_error=False)


def _secret_key() -> str:
    key = os.getenv("JWT_SECRET_KEY")
    if not key:
        raise RuntimeError("JWT_SECRET_KEY is not set")
    return key


def get_token_exp_minutes() -> int:
    try:
        return int(os.getenv("ACCESS_TOKEN_EXP_MINUTES", str(DEFAULT_EXP_MINUTES)))
    except ValueError:
        return DEFAULT_EXP_MINUTES


def create_token(user_id: str, expire_minutes: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "exp": now + timedelta(minutes=expire_minutes or get_token_exp_minutes()),
        "iat": now,
    }
    return jwt.encode(payload, _secret_key(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> str | None:
    """Returns the user id carried by ``token`` or None when it is invalid or expired."""
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    user_id = payload.get("sub")
    return user_id if isinstance(user_id, str) and user_id else None


def hash_password(password: str) -> str:
    return CRYPT_CONTEXT.hash(password)


async def check_credentials(email: str, cleartext_password: str, db: AsyncSession) -> User | None:
    try:
        res = await db.execute(
            select(User).where(User.email == email)
        )
        user = res.scalars().first()
    except SQLAlchemyError as e:
        logger.error(f"Credential lookup failed: {e}")
        return None

    if user is None or not CRYPT_CONTEXT.verify(cleartext_password, user.password):
        return None
    return user


async def get_current_user_id(
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
        db: AsyncSession = Depends(get_db),
) -> str:
    """
    Resolves the bearer token to the id of an existing user.
    Add ``user_id: str = Depends(get_current_user_id)`` to an endpoint to require login.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user_id = decode_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    if await db.get(User, user_id) is None:
        raise HTTPException(status_code=401, detail="User no longer exists")
    return user_id
