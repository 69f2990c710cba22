"""
Create all tables directly from the models.

Used for local development and SQLite deployments; production databases are
managed with Alembic (see app/db/migrate.py).
"""
import logging

from app.db.session import engine
from app.db.base import Base
import app.db.models  # noqa: F401  registers every model on Base.metadata

logger = logging.getLogger(__name__)


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")


if __name__ == "__main__":
    init_db()
