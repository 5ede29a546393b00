from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserProfileFields(BaseModel):
    """Body stats the planner and calculator pages prefill from"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: Optional[int] = Field(None, gt=0)
    gender: Optional[str] = None
    height: Optional[float] = Field(None, gt=0)  # cm
    weight: Optional[float] = Field(None, gt=0)  # kg
    fitness_goal: Optional[str] = None
    activity_level: Optional[str] = None


class UserRegister(UserProfileFields):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(UserProfileFields):
    username: Optional[str] = Field(None, min_length=3, max_length=50)

    @field_validator("username")
    @classmethod
    def _username_not_null(cls, v):
        # omit the field to leave the username unchanged
        if v is None:
            raise ValueError("username cannot be null")
        return v


class UserResponse(UserProfileFields):
    """User response model for API"""
    id: str
    username: str
    email: str
    role: str = "user"
    created_at: datetime
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


def public_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Strip the password hash and stringify the id."""
    out = {k: v for k, v in doc.items() if k not in ("password", "_id")}
    out["id"] = str(doc["_id"])
    return out
