import logging

from sqlalchemy.engine import Engine

from gradebook.db.base import Base
# Imported for their side effect of registering tables on Base.metadata
from gradebook.models import course, grade_column, grade_result, quiz, user  # noqa: F401

logger = logging.getLogger(__name__)

def init_db(engine: Engine) -> None:
    """Create every gradebook table that does not exist yet"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))
