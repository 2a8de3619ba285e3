"""
Store error handling shared by every route.

Reads that feed list pages are recoverable: a failed query degrades to an
empty result carrying a user-visible message. Writes are fatal: a failed
commit is rolled back and raised as `StoreError`, which the application turns
into the generic error page. Invalid submissions raise `InvalidInput` and
get the same page with status 400.
"""

import logging
from typing import Any, List, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A write against the database failed and was rolled back."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LoginRequired(Exception):
    """Raised by the auth guard when the session carries no user."""


class StoreResult(NamedTuple):
    rows: List[Any]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fetch_all(db: Session, query, message: str) -> StoreResult:
    """
    Run a read query, degrading to an empty result on store failure.

    Args:
        db (Session): The session the query is bound to.
        query (Query): The query to execute.
        message (str): User-visible text returned when the query fails.

    Returns:
        StoreResult: The rows, or an empty list and `message`.
    """
    try:
        return StoreResult(query.all())
    except SQLAlchemyError:
        logger.exception(message)
        db.rollback()
        return StoreResult([], message)


def commit_or_fail(db: Session, message: str) -> None:
    """
    Commit the session, rolling back and raising `StoreError` on failure.

    Args:
        db (Session): The session holding the pending write.
        message (str): Description of the failed operation.

    Raises:
        StoreError: If the commit fails.
    """
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s: %s", message, exc)
        raise StoreError(message) from exc


class InvalidInput(Exception):
    """Submitted form or path data failed validation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def required_text(value: str, message: str) -> str:
    """
    Strip a required form value, rejecting one that is blank.

    Raises:
        InvalidInput: If nothing but whitespace was submitted.
    """
    value = value.strip()
    if not value:
        raise InvalidInput(message)
    return value
