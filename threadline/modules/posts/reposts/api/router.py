from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status, Path
from sqlalchemy.orm import Session

from threadline.db.session import get_db
from threadline.deps import get_current_user
from threadline.modules.user_management.models.user import User
from threadline.modules.posts.services.post import get_post
from threadline.modules.posts.reposts.schemas.repost import RepostToggle, RepostCheck, RepostCount
from threadline.modules.posts.reposts.services.repost import get_repost, count_reposts, toggle_repost

router = APIRouter()

@router.post("", response_model=RepostToggle)
def repost_post(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to repost"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Repost a post, or undo the repost if it exists"""
    post = get_post(db, post_id=post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

    if toggle_repost(db, post, current_user.id):
        return {"message": "Post reposted", "reposted": True}
    return {"message": "Repost removed", "reposted": False}

@router.get("/check", response_model=RepostCheck)
def check_repost(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to check"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Whether the current user has reposted the post"""
    return {"reposted": get_repost(db, current_user.id, post_id) is not None}

@router.get("/count", response_model=RepostCount)
def read_repost_count(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to count reposts for"),
) -> Any:
    return {"count": count_reposts(db, post_id)}
