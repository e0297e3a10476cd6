import logging
from sqlalchemy.orm import Session


class BaseService:
    """Common plumbing for services bound to one request-scoped session."""

    def __init__(self, db: Session):
        self.db = db
        self._logger = logging.getLogger(self.__class__.__module__)

    def commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def log_info(self, message: str, **extra):
        self._logger.info(message, extra=extra or None)
