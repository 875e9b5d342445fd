from typing import List, Optional
import uuid
from sqlalchemy.orm import Session, joinedload

from threadline.modules.posts.models.post import Post
from threadline.modules.posts.comments.models.comment import Comment
from threadline.modules.posts.comments.schemas.comment import CommentCreate
from threadline.modules.notifications.services.notification_events import create_comment_notification

def get_comment(db: Session, comment_id: str) -> Optional[Comment]:
    """Get comment by ID"""
    return db.query(Comment).filter(Comment.id == comment_id).first()

def get_comments_by_post(db: Session, post_id: str) -> List[Comment]:
    """Comments on a post, oldest first"""
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc())
        .all()
    )

def create_comment(db: Session, post: Post, comment_in: CommentCreate, author_id: str) -> Comment:
    """Create a new comment and notify the post author"""
    comment = Comment(
        id=str(uuid.uuid4()),
        author_id=author_id,
        post_id=post.id,
        content=comment_in.content,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    create_comment_notification(db, post, author_id, comment.content)
    return comment

def delete_comment(db: Session, comment: Comment) -> Comment:
    """Delete comment"""
    db.delete(comment)
    db.commit()
    return comment
