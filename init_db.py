"""
Database initialization script.
Creates every table known to the models in one go, without Alembic.
Run this as: python init_db.py
"""

import logging
import sys

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

from sqlalchemy import inspect
from threadline.db.session import engine
from threadline.db.base import Base
from threadline.core.config import settings

def init_db():
    """Initialize the database by creating all tables."""
    logger.info(f"Initializing database at: {settings.DATABASE_URL}")

    existing_tables = inspect(engine).get_table_names()
    logger.info(f"Existing tables: {existing_tables}")

    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        return False

    new_tables = set(inspect(engine).get_table_names()) - set(existing_tables)
    if new_tables:
        logger.info(f"Newly created tables: {new_tables}")
    else:
        logger.info("No new tables were created")
    return True

if __name__ == "__main__":
    logger.info("Starting database initialization")
    if init_db():
        logger.info("Database initialization completed successfully")
    else:
        logger.error("Database initialization failed")
        sys.exit(1)
