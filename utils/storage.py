from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import StorageUnavailable
from utils.logger import logger

@contextmanager
def storage_errors(db: Session, operation: str):
    """Roll back and re-raise persistence faults as StorageUnavailable."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{operation} failed: {e}")
        raise StorageUnavailable(f"{operation} failed") from e
