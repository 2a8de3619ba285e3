from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.orm import Session

from CondoManager.database import get_db
from CondoManager.errors import commit_or_fail, fetch_all, required_text
from CondoManager.models import CalendarEvent
from CondoManager.routes.auth import get_current_user
from CondoManager.search import apply_search, date_field, text_field
from CondoManager.templating import redirect, render

router = APIRouter(dependencies=[Depends(get_current_user)])

CALENDAR_SEARCH_FIELDS = [
    text_field(CalendarEvent.event_title),
    date_field(CalendarEvent.start_time),
]


@router.get("/calendar")
def calendar(request: Request, search: Optional[str] = None, db: Session = Depends(get_db)):
    query = apply_search(db.query(CalendarEvent), CALENDAR_SEARCH_FIELDS, search)
    query = query.order_by(CalendarEvent.start_time.asc(), CalendarEvent.event_id.asc())
    result = fetch_all(db, query, "Error loading calendar events")
    return render(request, "calendar", {
        "events": result.rows,
        "searchTerm": search,
        "error": result.error,
    })


@router.post("/calendar/add")
def add_event(
    event_title: str = Form(...),
    start_time: datetime = Form(...),
    db: Session = Depends(get_db),
):
    event = CalendarEvent(
        event_title=required_text(event_title, "Event title is required"),
        start_time=start_time,
    )
    db.add(event)
    commit_or_fail(db, "Failed to add calendar event")
    return redirect("/calendar")
