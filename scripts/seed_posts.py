#!/usr/bin/env python3

"""
Seed script for sample posts.
This script:
1. Deletes every existing post, with its comments, reposts and notifications
2. Creates a round of sample posts spread across the existing users
"""

import logging
import os
import sys

# Add parent directory to path to import threadline modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from threadline.db.session import SessionLocal
import threadline.db.base  # noqa: F401
from threadline.modules.user_management.models.user import User
from threadline.modules.posts.models.post import Post
from threadline.modules.posts.schemas.post import PostCreate
from threadline.modules.posts.services.post import create_post, delete_post

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_POSTS = [
    "Just finished an amazing workout! Consistency beats perfection every time.",
    "Coffee and coding, the perfect morning combo. Working on some new features today!",
    "Had the most beautiful sunset walk today. The simplest moments are the most meaningful.",
    "New recipe experiment in the kitchen today! What's your favorite comfort food?",
    "Reading session with my favorite book. Any recommendations?",
    "Music studio session today, working on some new tracks.",
    "Hiking in the mountains today. The views are absolutely breathtaking.",
    "Tech meetup tonight! Always excited to meet fellow developers.",
    "Learning a new programming language today. What are you learning?",
    "Art studio day! Working on a new painting.",
    "Late night coding session. The best ideas come when the world is quiet.",
    "Photography walk in the city, one frame at a time.",
]

def seed_posts() -> int:
    """Replace all posts with the sample set and return how many were created"""
    db = SessionLocal()
    try:
        users = db.query(User).order_by(User.created_at).all()
        if not users:
            logger.error("No users found. Register some users before seeding posts.")
            return 0

        existing = db.query(Post).all()
        for post in existing:
            delete_post(db, post)
        logger.info(f"Cleared {len(existing)} existing posts")

        created = 0
        for index, content in enumerate(SAMPLE_POSTS):
            author = users[index % len(users)]
            create_post(db, PostCreate(content=content), author.id)
            logger.info(f"- {author.username}: \"{content}\"")
            created += 1

        logger.info(f"Successfully created {created} posts")
        return created
    finally:
        db.close()

if __name__ == "__main__":
    if not seed_posts():
        sys.exit(1)
