#!/usr/bin/env python3
"""
Standalone database initialization script.
Creates every table for the configured DATABASE_URL.
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from domain.models import Database

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("nutrition_tracker.init_db")


def main(drop: bool = False) -> int:
    database = Database(settings.database_url, echo=settings.db_echo)
    try:
        if drop:
            logger.warning("Dropping all tables")
            database.drop_all()
        database.init_database()
        tables = inspect(database.engine).get_table_names()
        logger.info(f"Created {len(tables)} tables: {', '.join(sorted(tables))}")
        return 0
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database: {e}")
        return 1
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main(drop="--drop" in sys.argv[1:]))
