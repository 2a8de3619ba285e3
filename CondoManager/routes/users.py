import logging

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from CondoManager.database import get_db
from CondoManager.models import User
from CondoManager.routes.auth import get_current_user
from CondoManager.sessions import SESSION_KEY, session_store, user_snapshot
from CondoManager.templating import redirect, render
from CondoManager.utils import verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/login")
def login_form(request: Request):
    return render(request, "login", {"error": None})


# login
@router.post("/login")
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
):
    """
    Authenticate a user and start a session.

    Args:
        request (Request): The incoming request.
        username (str): Submitted username (matched exactly).
        password (str): Submitted password.
        db (Session): The database session.

    Returns:
        Response: A redirect to the dashboard, or the login form with an error.
    """
    try:
        user = db.query(User).filter(User.username == username).first()
    except SQLAlchemyError:
        logger.exception("Login lookup failed for %r", username)
        return render(request, "login", {"error": "Database error"})

    if not user or not verify_password(password, user.password_hash):
        logger.info("Rejected login for %r", username)
        return render(request, "login", {"error": "Invalid credentials"})

    # Replace any previous session rather than reusing its id
    session_store.destroy(request.session.get(SESSION_KEY))
    request.session[SESSION_KEY] = session_store.create(user_snapshot(user))
    logger.info("User %s logged in", user.user_id)
    return redirect("/")


@router.get("/logout")
def logout(request: Request):
    session_store.destroy(request.session.get(SESSION_KEY))
    request.session.clear()
    return redirect("/login")


@router.get("/profile")
def profile(
    request: Request,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Show the logged-in user.

    The session snapshot can be stale, so the row is re-read here; the
    snapshot is shown only if the row no longer exists.
    """
    user = db.query(User).filter(User.user_id == current_user["user_id"]).first()
    return render(request, "profile", {"user": user or current_user})
