import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from CondoManager.constants import (
    PENDING,
    DASHBOARD_MAINTENANCE_LIMIT,
    DASHBOARD_EVENTS_LIMIT,
    DASHBOARD_MESSAGES_LIMIT,
    DASHBOARD_EXPENSES_LIMIT,
)
from CondoManager.database import get_db
from CondoManager.errors import fetch_all
from CondoManager.models import MaintenanceRequest, Property, CalendarEvent, Message, User, Expense
from CondoManager.routes.auth import get_current_user
from CondoManager.templating import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter()


def _pending_maintenance(db: Session):
    return (
        db.query(
            MaintenanceRequest.request_id,
            MaintenanceRequest.description,
            MaintenanceRequest.status,
            MaintenanceRequest.date_reported,
            Property.nickname,
        )
        .join(Property, MaintenanceRequest.property_id == Property.property_id)
        .filter(MaintenanceRequest.status == PENDING)
        .order_by(MaintenanceRequest.date_reported.desc())
        .limit(DASHBOARD_MAINTENANCE_LIMIT)
    )


def _upcoming_events(db: Session, now: datetime):
    return (
        db.query(CalendarEvent)
        .filter(CalendarEvent.start_time >= now)
        .order_by(CalendarEvent.start_time.asc())
        .limit(DASHBOARD_EVENTS_LIMIT)
    )


def _recent_messages(db: Session):
    # Outer join so a post whose author row is gone still shows up
    return (
        db.query(
            Message.message_id,
            Message.message,
            Message.created_time,
            User.username,
        )
        .outerjoin(User, Message.user_id == User.user_id)
        .order_by(Message.created_time.desc())
        .limit(DASHBOARD_MESSAGES_LIMIT)
    )


def _recent_expenses(db: Session):
    return (
        db.query(Expense)
        .order_by(Expense.expense_date.desc(), Expense.expense_id.desc())
        .limit(DASHBOARD_EXPENSES_LIMIT)
    )


@router.get("/")
def dashboard(
    request: Request,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Landing page with the latest activity.

    Four independent, bounded reads. If any of them fails every list is
    rendered empty instead of failing the page.

    Args:
        request (Request): The incoming request.
        current_user (dict): The session user.
        db (Session): The database session.

    Returns:
        TemplateResponse: The rendered dashboard.
    """
    now = datetime.now()
    results = {
        "maintenance": fetch_all(db, _pending_maintenance(db), "Error loading maintenance requests"),
        "events": fetch_all(db, _upcoming_events(db, now), "Error loading calendar events"),
        "messages": fetch_all(db, _recent_messages(db), "Error loading messages"),
        "expenses": fetch_all(db, _recent_expenses(db), "Error loading expenses"),
    }

    if all(result.ok for result in results.values()):
        lists = {key: result.rows for key, result in results.items()}
    else:
        logger.warning("Dashboard rendered without data: one or more reads failed")
        lists = {key: [] for key in results}

    return render(request, "landingpage", {"user": current_user, **lists})


@router.get("/landingpage")
def landingpage(current_user: dict = Depends(get_current_user)):
    return redirect("/")
