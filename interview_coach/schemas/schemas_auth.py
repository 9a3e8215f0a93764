from pydantic import BaseModel, constr

from interview_coach.schemas.schemas_user import UserOut


class UserLogin(BaseModel):
    email: constr(strip_whitespace=True, to_lower=True, min_length=3, max_length=255)
    password: constr(min_length=1, max_length=255)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
