from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.orm import Session

from CondoManager.database import get_db
from CondoManager.errors import commit_or_fail, fetch_all, required_text
from CondoManager.models import Message, User
from CondoManager.routes.auth import get_current_user
from CondoManager.search import apply_search, date_field, text_field
from CondoManager.templating import redirect, render

router = APIRouter(dependencies=[Depends(get_current_user)])

BOARD_SEARCH_FIELDS = [
    text_field(Message.message),
    text_field(User.username),
    date_field(Message.created_time),
]


def _with_author(db: Session):
    return (
        db.query(Message, User.username)
        .join(User, Message.user_id == User.user_id)
    )


@router.get("/board")
def message_board(
    request: Request,
    search: Optional[str] = None,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Flat list of board posts, newest first.

    Args:
        request (Request): The incoming request.
        search (str, optional): Matched against the post text, the author's
            username and the rendered post date.
        current_user (dict): The session user.
        db (Session): The database session.

    Returns:
        TemplateResponse: The rendered board.
    """
    query = apply_search(_with_author(db), BOARD_SEARCH_FIELDS, search)
    query = query.order_by(Message.created_time.desc(), Message.message_id.desc())
    result = fetch_all(db, query, "Error loading messages")
    return render(request, "board", {
        "messages": result.rows,
        "user": current_user,
        "searchTerm": search,
        "error": result.error,
    })


@router.get("/board/thread/{message_id}")
def thread_detail(request: Request, message_id: int, db: Session = Depends(get_db)):
    row = _with_author(db).filter(Message.message_id == message_id).first()
    return render(request, "thread_detail", {
        "message": row[0] if row else None,
        "username": row[1] if row else None,
    })


@router.post("/board/add")
def add_message(
    message: str = Form(...),
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = Message(
        user_id=current_user["user_id"],
        message=required_text(message, "Message text is required"),
        created_time=datetime.now(),
    )
    db.add(post)
    commit_or_fail(db, "Failed to post message")
    return redirect("/board")
