from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from threadline.db.session import Base

class Repost(Base):
    __tablename__ = "reposts"

    id = Column(String, primary_key=True, index=True)
    reposter_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    # No unique (reposter_id, original_post_id) constraint: the repost toggle keeps pairs unique.
    # Nullable so rows whose post went missing can still be found and cleaned up.
    original_post_id = Column(String, ForeignKey("posts.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    reposter = relationship("User")
    original_post = relationship("Post", back_populates="reposts")
