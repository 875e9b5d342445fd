from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class UserBase(BaseModel):
    username: str
    email: EmailStr
    bio: Optional[str] = ""
    profile_picture: Optional[str] = ""

class UserCreate(UserBase):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)

class UserSummary(BaseModel):
    """Public author card embedded in posts, reposts and conversations"""
    id: str
    username: str
    profile_picture: Optional[str] = ""
    bio: Optional[str] = ""

    model_config = ConfigDict(from_attributes=True)

class User(UserBase):
    """User model returned to client"""
    id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserProfile(User):
    followers_count: int = 0
    following_count: int = 0

class ProfileResponse(BaseModel):
    user: User

class ProfileUpdateResponse(BaseModel):
    message: str
    user: User
    profile_picture: Optional[str] = ""
