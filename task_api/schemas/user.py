import re

from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from task_api.utils.sanitization import sanitize_string


USERNAME_PATTERN = r"^[A-Za-z0-9_-]{2,15}$"
PASSWORD_RE = re.compile(r"""^[A-Za-z0-9!@#$%^&*()_+\-=\[\]{};':"\\|,.<>/?]{6,}$""")


class UserBase(BaseModel):
    username: str = Field(..., pattern=USERNAME_PATTERN)
    email: EmailStr

    @field_validator("username", "email", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class UserCreate(UserBase):
    password: str = Field(..., max_length=72)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        if not PASSWORD_RE.match(v):
            raise ValueError("Password must be at least 6 characters long and contain only valid characters")
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    user_id: int | None = None


class UserResponse(UserBase):
    user_id: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class UserRegistered(BaseModel):
    user_id: int
    username: str
    email: EmailStr
    access_token: str
    token_type: str = "bearer"
