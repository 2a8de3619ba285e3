import argparse
import getpass
import logging
import sys

from CondoManager.database import SessionLocal
from CondoManager.models import User
from CondoManager.utils import hash_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_user(username, password, email=None):
    """
    Insert a user with a bcrypt-hashed password.

    Args:
        username (str): Login name; must not exist yet.
        password (str): Plain text password to hash.
        email (str, optional): Contact email.

    Returns:
        User: The created user, or None if the username is taken.
    """
    db = SessionLocal()
    try:
        if db.query(User).filter(User.username == username).first():
            logger.error("User %r already exists.", username)
            return None
        user = User(username=username, password_hash=hash_password(password), email=email)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created user %r with id %s.", username, user.user_id)
        return user
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create a Condo Manager login.")
    parser.add_argument("username")
    parser.add_argument("--email")
    args = parser.parse_args(argv)

    password = getpass.getpass("Password: ")
    if not password or password != getpass.getpass("Repeat password: "):
        logger.error("Passwords are empty or do not match.")
        return 1
    return 0 if create_user(args.username, password, args.email) else 1


if __name__ == "__main__":
    sys.exit(main())
