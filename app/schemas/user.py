from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$", description="Public handle")


class UserCreate(UserBase):
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=64)


class UserLogin(UserBase):
    password: str = Field(..., min_length=1, max_length=64)


class UserResponse(UserBase):
    id: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
