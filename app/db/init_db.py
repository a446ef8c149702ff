"""
Database initialization.

Creates all tables for development setups that do not run Alembic.
"""

import logging

from sqlmodel import SQLModel

from app.db.session import engine

logger = logging.getLogger(__name__)


def init_db(bind=None) -> None:
    """
    Initialize database schema.

    Args:
        bind: Engine to create the tables on (defaults to the application engine)
    """
    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(bind or engine)
    logger.info("Tables created successfully")


if __name__ == "__main__":
    init_db()
