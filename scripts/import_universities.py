"""
Import universities from a local CSV file.
Run: python -m scripts.import_universities data/universities.csv [--strict]
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import ImportFileError
from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.services.catalog_service import storage_error_message
from app.services.import_service import import_universities, is_csv_upload
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(path: str, strict: bool = False) -> bool:
    if not is_csv_upload(path, None):
        logger.error("Please upload a CSV file")
        return False

    with open(path, "rb") as f:
        content = f.read()

    init_db()
    db = SessionLocal()
    try:
        result = import_universities(db, content, strict=strict)
    except ImportFileError as e:
        logger.error(str(e))
        return False
    except SQLAlchemyError as e:
        logger.error(storage_error_message(e))
        return False
    finally:
        db.close()

    logger.info(result.message)
    for rejection in result.rejected:
        logger.warning(f"Row {rejection.row} rejected: {'; '.join(rejection.errors)}")
    return True


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.import_universities <file.csv> [--strict]")
        sys.exit(1)
    sys.exit(0 if main(sys.argv[1], strict="--strict" in sys.argv[2:]) else 1)
