import logging
from contextlib import contextmanager

from sqlalchemy.orm import Session

from gradebook.ports.transaction import ITransactionScope

logger = logging.getLogger(__name__)


class SessionTransaction(ITransactionScope):
    """Commit/rollback boundary over a request-scoped SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db
        self._depth = 0

    @contextmanager
    def scope(self):
        if self._depth:
            # Joined scope: the outermost block owns commit/rollback
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield
            self.db.commit()
        except Exception:
            logger.debug("Rolling back transaction", exc_info=True)
            self.db.rollback()
            raise
        finally:
            self._depth = 0
