from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint

from threadline.db.session import Base

# Self-referential follow edge: follower_id follows following_id
class Follow(Base):
    __tablename__ = "follows"

    follower_id = Column(String, ForeignKey("users.id"), primary_key=True)
    following_id = Column(String, ForeignKey("users.id"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint("follower_id != following_id", name="no_self_follow"),
    )
