import logging

from CondoManager.database import SessionLocal
from CondoManager.models import User
from CondoManager.utils import hash_password, is_password_hash

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def rehash_passwords():
    """
    Replace plain-text values in `users.password_hash` with bcrypt hashes.

    Rows that already hold a hash passlib recognises are left untouched, so
    the script can be run more than once.
    """
    db = SessionLocal()
    try:
        users = db.query(User).all()
        count = 0
        for user in users:
            if not user.password_hash or is_password_hash(user.password_hash):
                continue
            user.password_hash = hash_password(user.password_hash)
            count += 1

        db.commit()
        logger.info("Rehashed %s of %s user passwords.", count, len(users))
        return count
    except Exception:
        db.rollback()
        logger.exception("Rehash failed; no passwords were changed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    rehash_passwords()
