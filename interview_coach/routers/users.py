import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from interview_coach.auth.auth_util import get_current_user_id, hash_password
from interview_coach.db import get_db
from interview_coach.db.models_user import User
from interview_coach.schemas.schemas_user import UserOut, UserUpdate

router = APIRouter(
    prefix="/users",
    tags=["users"]
)
logger = logging.getLogger(__name__)


async def _load_user(user_id: str, db: AsyncSession) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/profile", response_model=UserOut)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> UserOut:
    return UserOut.model_validate(await _load_user(user_id, db))


@router.put("/profile", response_model=UserOut)
async def update_profile(
    payload: UserUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> UserOut:
    """
    Updates name, email and/or password of the logged-in user.
    Fields left out of the payload stay unchanged.
    """
    user = await _load_user(user_id, db)

    if payload.name:
        user.name = payload.name

    if payload.email and payload.email != user.email:
        res = await db.execute(
            select(User).where(User.email == payload.email)
        )
        if res.scalar():
            raise HTTPException(status_code=400, detail="Email already in use")
        user.email = payload.email

    if payload.password:
        user.password = hash_password(payload.password)

    await db.commit()
    await db.refresh(user)
    logger.info(f"Updated profile of user {user_id}")
    return UserOut.model_validate(user)


@router.delete("/{target_user_id}", status_code=204)
async def delete_user(
    target_user_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await _load_user(target_user_id, db)
    if target_user_id != user_id:
        raise HTTPException(status_code=403, detail="Not authorized to delete this user")

    await db.delete(user)
    await db.commit()
    logger.info(f"Deleted user {target_user_id}")
    return None
