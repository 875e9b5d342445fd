from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status, Path
from sqlalchemy.orm import Session
import logging

from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.modules.auth.schemas.auth import MessageResponse
from threadline.modules.user_management.models.user import User
from threadline.modules.posts.models.post import Post
from threadline.modules.posts.services.post import get_post
from threadline.modules.posts.comments.schemas.comment import Comment as CommentSchema, CommentCreate
from threadline.modules.posts.comments.services.comment import (
    get_comment, get_comments_by_post, create_comment, delete_comment
)

router = APIRouter()
logger = logging.getLogger("threadline")

def _validate_post(db: Session, post_id: str) -> Post:
    """Validate post exists and return it or raise HTTPException"""
    post = get_post(db, post_id=post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )
    return post

@router.get("", response_model=List[CommentSchema])
def read_comments(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to get comments for"),
) -> Any:
    """Comments on a post, oldest first"""
    _validate_post(db, post_id)
    return get_comments_by_post(db, post_id)

@router.post("", response_model=CommentSchema, status_code=status.HTTP_201_CREATED)
def create_post_comment(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    post = _validate_post(db, post_id)
    return create_comment(db, post, comment_in, current_user.id)

@router.delete("/{comment_id}", response_model=MessageResponse, response_model_exclude_none=True)
def delete_post_comment(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post the comment belongs to"),
    comment_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Delete a comment; allowed for its author and for the post's author"""
    post = _validate_post(db, post_id)
    comment = get_comment(db, comment_id=comment_id)
    if not comment or comment.post_id != post.id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found"
        )

    if current_user.id not in (comment.author_id, post.author_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

    delete_comment(db, comment)
    return {"message": "Comment deleted successfully"}
