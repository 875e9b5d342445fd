from typing import Optional
from pydantic import BaseModel

from threadline.modules.user_management.schemas.user import User

class LoginRequest(BaseModel):
    email: str
    password: str

class LoginResponse(BaseModel):
    token: str
    user: User

class TokenValidation(BaseModel):
    valid: bool
    user_id: str
    username: str
    email: str

class MessageResponse(BaseModel):
    message: str
    count: Optional[int] = None
