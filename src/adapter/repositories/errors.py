import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from src.domain.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(operation: str):
    """Re-raise driver failures as StoreError"""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Account store failure during %s: %s", operation, exc)
        raise StoreError("STORE_UNAVAILABLE", "Account store unavailable") from exc
