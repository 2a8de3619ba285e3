from datetime import date, datetime
from typing import Optional, Union

from passlib.context import CryptContext

from CondoManager.constants import DISPLAY_DATE_FORMAT

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password, encrypted_password):
    """
    Verify a password against its hash.

    The comparison is done by passlib in constant time. A stored value that
    is not a well-formed hash (e.g. a legacy plain-text password or a
    truncated value) never matches.

    Args:
        plain_password (str): The plain text password.
        encrypted_password (str): The hashed password.

    Returns:
        bool: True if the password matches, False otherwise.
    """
    if not plain_password or not encrypted_password:
        return False
    if not is_password_hash(encrypted_password):
        return False
    try:
        return pwd_context.verify(plain_password, encrypted_password)
    except ValueError:
        # Recognised prefix but a malformed hash body
        return False


def hash_password(password):
    """
    Hash a password.

    Args:
        password (str): The password to hash.

    Returns:
        str: The salted bcrypt hash.
    """
    return pwd_context.hash(password)


def is_password_hash(value) -> bool:
    return pwd_context.identify(value) is not None


def format_display_date(value: Optional[Union[date, datetime]]) -> str:
    """
    Render a date the way users see it, e.g. "Monday, December 01, 2025".

    This is the same rendering the list searches match against.

    Args:
        value (date | datetime | None): The value to render.

    Returns:
        str: The formatted date, or an empty string for None.
    """
    if value is None:
        return ""
    return value.strftime(DISPLAY_DATE_FORMAT)
