"""
Database initialization script.

Creates the roster tables directly (without Alembic) and optionally
resynchronises the participation history of every military.

Usage:
    python scripts/init_db.py [--sync-history]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlmodel import Session

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.db.init_db import init_db
from app.db.session import engine
from app.services.history_service import HistoryService

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the Folga database tables.")
    parser.add_argument("--sync-history", action="store_true", help="Rebuild participation history afterwards")
    args = parser.parse_args()

    logger = setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    try:
        init_db()
        if args.sync_history:
            with Session(engine) as session:
                updated = HistoryService(session).sync_all()
            logger.info("History resynchronised for %d militaries", updated)
    except Exception:
        logger.exception("Database initialization failed")
        sys.exit(1)

    logger.info("Database initialized")
    sys.exit(0)
