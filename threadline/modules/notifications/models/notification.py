from datetime import datetime

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Text
from sqlalchemy.orm import relationship

from threadline.db.session import Base

LIKE = "like"
REPOST = "repost"
FOLLOW = "follow"
COMMENT = "comment"
MESSAGE = "message"

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, index=True)
    recipient_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    sender_id = Column(String, ForeignKey("users.id"), nullable=True)  # The user who triggered the notification
    type = Column(String, nullable=False)  # like, repost, follow, comment, message
    post_id = Column(String, ForeignKey("posts.id"), nullable=True)
    content = Column(Text, nullable=True)  # Additional context
    read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    sender = relationship("User", foreign_keys=[sender_id])
    post = relationship("Post")
