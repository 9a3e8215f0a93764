import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from interview_coach.auth.auth_util import (
    check_credentials,
    create_token,
    get_current_user_id,
    hash_password,
)
from interview_coach.db import get_db
from interview_coach.db.models_user import User
from interview_coach.schemas.schemas_auth import TokenOut, UserLogin
from interview_coach.schemas.schemas_user import UserCreate, UserOut

EMAIL_OR_PASSWORD_INCORRECT_MSG = "Email or password incorrect"

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)
logger = logging.getLogger(__name__)


def _token_response(user: User) -> TokenOut:
    return TokenOut(access_token=create_token(user.id), user=UserOut.model_validate(user))


@router.post("/register", response_model=TokenOut, status_code=201)
async def register(
        payload: UserCreate,
        db: AsyncSession = Depends(get_db),
) -> TokenOut:
    res = await db.execute(
        select(User).where(User.email == payload.email)
    )
    if res.scalar():
        raise HTTPException(status_code=409, detail="User already exists")

    new_user = User(name=payload.name, email=payload.email, password=hash_password(payload.password))
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="User already exists")
    await db.refresh(new_user)

    logger.info(f"Registered user {new_user.id}")
    return _token_response(new_user)


@router.post("/login", response_model=TokenOut)
async def login(
        payload: UserLogin,
        db: AsyncSession = Depends(get_db),
) -> TokenOut:
    user = await check_credentials(payload.email, payload.password, db)
    if user is None:
        raise HTTPException(401, detail=EMAIL_OR_PASSWORD_INCORRECT_MSG)
    return _token_response(user)


@router.get("/me", response_model=UserOut)
async def me(
        user_id: str = Depends(get_current_user_id),
        db: AsyncSession = Depends(get_db),
) -> UserOut:
    user = await db.get(User, user_id)
    return UserOut.model_validate(user)
