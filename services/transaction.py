from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import AppError, InternalError

logger = logging.getLogger("nutrition_tracker.transaction")


@contextmanager
def unit_of_work(db: Session, operation: str) -> Iterator[Session]:
    """Commit once on success; roll back everything on failure.

    Persistence errors are logged with full detail and re-raised as
    InternalError so nothing about the database leaks to the client.
    """
    try:
        yield db
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"{operation}_failed error={exc}")
        raise InternalError() from exc
