# interview_coach/schemas/schemas_user.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, constr


class UserCreate(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=80)
    email: constr(strip_whitespace=True, to_lower=True, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: constr(min_length=6, max_length=255)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str
    email: str
    created_at: datetime = Field(alias="createdAt")


class UserUpdate(BaseModel):
    name: Optional[constr(strip_whitespace=True, min_length=1, max_length=80)] = None
    email: Optional[constr(strip_whitespace=True, to_lower=True, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")] = None
    password: Optional[constr(min_length=6, max_length=255)] = None
