#!/usr/bin/env python3

"""
Finds reposts whose original post is missing and deletes them.
Run with --check to only report them.
"""

import argparse
import logging
import os
import sys

# Add parent directory to path to import threadline modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from threadline.db.session import SessionLocal
import threadline.db.base  # noqa: F401
from threadline.modules.posts.reposts.models.repost import Repost
from threadline.modules.posts.reposts.services.repost import get_orphaned_reposts, delete_orphaned_reposts

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def main():
    parser = argparse.ArgumentParser(description="Clean up reposts pointing at missing posts")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only report orphaned reposts, do not delete them"
    )
    args = parser.parse_args()

    db = SessionLocal()
    try:
        if args.check:
            orphans = get_orphaned_reposts(db)
            for repost in orphans:
                logger.info(f"Repost {repost.id} by {repost.reposter_id} points at missing post {repost.original_post_id}")
            logger.info(f"Found {len(orphans)} orphaned reposts")
        else:
            deleted = delete_orphaned_reposts(db)
            logger.info(f"Deleted {deleted} orphaned reposts")

        logger.info(f"Remaining reposts: {db.query(Repost).count()}")
    finally:
        db.close()

if __name__ == "__main__":
    main()
