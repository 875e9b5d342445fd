"""Authentication router for email and password accounts"""
from typing import Any
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from threadline.core.security import create_access_token
from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.modules.auth.schemas.auth import LoginRequest, LoginResponse, MessageResponse, TokenValidation
from threadline.modules.auth.services.auth import authenticate_user, register_user, user_exists
from threadline.modules.user_management.models.user import User
from threadline.modules.user_management.schemas.user import UserCreate

router = APIRouter()
logger = logging.getLogger("threadline")

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED, response_model_exclude_none=True)
def register(*, db: Session = Depends(get_db), user_in: UserCreate) -> Any:
    """Create an account"""
    if user_exists(db, email=user_in.email, username=user_in.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    register_user(db, user_in)
    return {"message": "User registered successfully"}

@router.post("/login", response_model=LoginResponse)
def login(*, db: Session = Depends(get_db), credentials: LoginRequest) -> Any:
    """Exchange email and password for a bearer token"""
    logger.info(f"Login attempt: {credentials.email}")
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials",
        )

    return {"token": create_access_token(user.id), "user": user}

@router.get("/validate-token", response_model=TokenValidation)
def validate_token(current_user: User = Depends(get_current_user)) -> Any:
    """Validate the current user's token and return user information"""
    return {
        "valid": True,
        "user_id": current_user.id,
        "username": current_user.username,
        "email": current_user.email,
    }
