from typing import Dict, Optional

from fastapi import Request

from CondoManager.errors import LoginRequired
from CondoManager.sessions import SESSION_KEY, session_store


def get_session_user(request: Request) -> Optional[Dict[str, object]]:
    """Return the user snapshot for this request's session, if any."""
    return session_store.get(request.session.get(SESSION_KEY))


def get_current_user(request: Request) -> Dict[str, object]:
    """
    Auth guard dependency.

    Passes the session's user snapshot through when there is one. Otherwise
    raises `LoginRequired`, which the application answers with a redirect to
    the login page.

    Args:
        request (Request): The incoming request.

    Returns:
        dict: The authenticated user snapshot.

    Raises:
        LoginRequired: If the session holds no user.
    """
    user = get_session_user(request)
    if not user:
        raise LoginRequired()
    return user
