from typing import Any, List
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.modules.auth.schemas.auth import MessageResponse
from threadline.modules.user_management.models.user import User
from threadline.modules.posts.models.post import Post
from threadline.modules.posts.schemas.post import Post as PostSchema, PostCreate, PostDetail, LikeToggle
from threadline.modules.posts.services.post import get_post, get_posts, create_post, delete_post, toggle_like
from threadline.modules.follows.services.follow import get_following_ids

logger = logging.getLogger(__name__)

router = APIRouter()

def _validate_post(db: Session, post_id: str) -> Post:
    """Validate post exists and return it or raise HTTPException"""
    post = get_post(db, post_id=post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post

@router.post("/", response_model=PostSchema, status_code=status.HTTP_201_CREATED)
@router.post("", response_model=PostSchema, status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Session = Depends(get_db),
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create new post"""
    return create_post(db, post_in, current_user.id)

@router.get("/", response_model=List[PostDetail])
@router.get("", response_model=List[PostDetail])
def read_posts(db: Session = Depends(get_db)) -> Any:
    """All posts, newest first, with authors and reposts"""
    return get_posts(db)

@router.get("/following", response_model=List[PostDetail])
def read_following_posts(
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Posts written by the accounts the current user follows"""
    return get_posts(db, author_ids=get_following_ids(db, current_user.id))

@router.get("/{post_id}", response_model=PostSchema)
def read_post_by_id(*, db: Session = Depends(get_db), post_id: str) -> Any:
    """Get post by ID"""
    return _validate_post(db, post_id)

@router.delete("/{post_id}", response_model=MessageResponse, response_model_exclude_none=True)
def delete_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Delete a post and all associated data.
    This removes the post's comments, its reposts and the notifications pointing at it.
    """
    post = _validate_post(db, post_id)

    if post.author_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not authorized to delete this post",
        )

    delete_post(db, post)
    return {"message": "Post deleted successfully"}

@router.post("/{post_id}/like", response_model=LikeToggle)
def like_post(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Toggle the current user's like on a post"""
    post = _validate_post(db, post_id)
    post, liked = toggle_like(db, post, current_user.id)
    return {"post": post, "likes_count": len(post.likes), "liked": liked}
