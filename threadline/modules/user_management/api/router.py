from typing import Any, List, Optional
import logging
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form, Query
from sqlalchemy.orm import Session

from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.core.config import settings
from threadline.core.security import verify_password
from threadline.core.storage import media_storage
from threadline.modules.user_management.models.user import User
from threadline.modules.user_management.schemas.user import (
    User as UserSchema,
    UserProfile,
    ProfileResponse,
    ProfileUpdateResponse,
)
from threadline.modules.user_management.services.user import (
    get_user, get_user_by_username, search_users, update_profile
)
from threadline.modules.follows.services.follow import (
    get_followers, get_following, count_followers, count_following
)

router = APIRouter()
logger = logging.getLogger("threadline")

def _validate_user(db: Session, user_id: str) -> User:
    """Validate user exists and return user object or raise HTTPException"""
    user = get_user(db, user_id=user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user

@router.get("/profile", response_model=ProfileResponse)
def read_profile(
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get current user"""
    return {"user": current_user}

@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_user_profile(
    *,
    db: Session = Depends(get_db),
    username: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    current_password: Optional[str] = Form(None),
    new_password: Optional[str] = Form(None),
    profile_picture: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Update the current user's profile.

    Changing the password requires the current one. A new profile picture
    replaces the previous file in media storage.
    """
    username = username.strip() if username else None
    if username and username != current_user.username:
        if get_user_by_username(db, username=username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username is already taken"
            )

    if new_password:
        if not current_password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is required to set a new password"
            )
        if not verify_password(current_password, current_user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is incorrect"
            )

    picture_url = None
    if profile_picture is not None and profile_picture.filename:
        if not (profile_picture.content_type or "").startswith("image/"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only image files are allowed"
            )

        content = await profile_picture.read()
        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB"
            )
        await profile_picture.seek(0)

        old_picture = current_user.profile_picture
        picture_url = await media_storage.upload_file(profile_picture, prefix="profile_pictures")
        logger.info(f"Stored new profile picture for user {current_user.id}: {picture_url}")
        if old_picture:
            media_storage.delete_file(old_picture)

    user = update_profile(
        db,
        current_user,
        username=username,
        bio=bio,
        new_password=new_password,
        profile_picture=picture_url,
    )
    return {
        "message": "Profile updated successfully",
        "user": user,
        "profile_picture": user.profile_picture,
    }

@router.get("/search", response_model=List[UserSchema])
def search_for_users(
    *,
    db: Session = Depends(get_db),
    q: str = Query(..., min_length=1, description="Search query for username or bio"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Search for users by username or bio"""
    return search_users(db, q, exclude_id=current_user.id)

@router.get("/{user_id}", response_model=UserProfile)
def read_user_by_id(
    user_id: str,
    db: Session = Depends(get_db),
) -> Any:
    """Get a specific user by id, with follower counts"""
    user = _validate_user(db, user_id)
    return UserProfile(
        **UserSchema.model_validate(user).model_dump(),
        followers_count=count_followers(db, user.id),
        following_count=count_following(db, user.id),
    )

@router.get("/{user_id}/followers", response_model=List[UserSchema])
def read_followers(user_id: str, db: Session = Depends(get_db)) -> Any:
    _validate_user(db, user_id)
    return get_followers(db, user_id)

@router.get("/{user_id}/following", response_model=List[UserSchema])
def read_following(user_id: str, db: Session = Depends(get_db)) -> Any:
    _validate_user(db, user_id)
    return get_following(db, user_id)
