"""
Grant (or revoke) catalog admin rights for an account.
Run: python -m scripts.make_admin user@example.com [--revoke]
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.session import SessionLocal
from app.db.models.user import User
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def set_admin(email: str, is_admin: bool = True) -> bool:
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email.lower()).first()
        if not user:
            logger.error(f"User {email} not found. Sign up first.")
            return False

        user.is_admin = is_admin
        db.commit()
        logger.info(f"{'Granted' if is_admin else 'Revoked'} admin for {email} (ID: {user.id})")
        return True
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.make_admin <email> [--revoke]")
        sys.exit(1)
    ok = set_admin(sys.argv[1], is_admin="--revoke" not in sys.argv[2:])
    sys.exit(0 if ok else 1)
