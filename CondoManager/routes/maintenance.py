import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.orm import Session

from CondoManager.constants import PENDING, COMPLETED
from CondoManager.database import get_db
from CondoManager.errors import commit_or_fail, fetch_all, required_text
from CondoManager.models import MaintenanceRequest, Property
from CondoManager.routes.auth import get_current_user
from CondoManager.search import apply_search, date_field, text_field
from CondoManager.templating import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])

MAINTENANCE_SEARCH_FIELDS = [
    text_field(MaintenanceRequest.description),
    text_field(Property.nickname),
    text_field(MaintenanceRequest.status),
    date_field(MaintenanceRequest.date_reported),
]


def _with_nickname(db: Session):
    return (
        db.query(MaintenanceRequest, Property.nickname)
        .join(Property, MaintenanceRequest.property_id == Property.property_id)
    )


@router.get("/maintenance")
def list_maintenance(request: Request, search: Optional[str] = None, db: Session = Depends(get_db)):
    """
    List maintenance requests, newest report first.

    Args:
        request (Request): The incoming request.
        search (str, optional): Matched against description, unit nickname,
            status and the rendered report date.
        db (Session): The database session.

    Returns:
        TemplateResponse: The rendered request list.
    """
    query = apply_search(_with_nickname(db), MAINTENANCE_SEARCH_FIELDS, search)
    query = query.order_by(MaintenanceRequest.date_reported.desc(), MaintenanceRequest.request_id.desc())
    result = fetch_all(db, query, "Error loading maintenance requests")
    return render(request, "maintenance_list", {
        "requests": result.rows,
        "searchTerm": search,
        "error": result.error,
    })


@router.get("/maintenance/new")
def new_maintenance(request: Request, db: Session = Depends(get_db)):
    properties = (
        db.query(Property.property_id, Property.nickname)
        .order_by(Property.nickname)
        .all()
    )
    return render(request, "maintenance_new", {"properties": properties})


@router.post("/maintenance/add")
def add_maintenance(
    property_id: int = Form(...),
    description: str = Form(...),
    db: Session = Depends(get_db),
):
    # New requests always start Pending, reported now
    maintenance_request = MaintenanceRequest(
        property_id=property_id,
        description=required_text(description, "Description is required"),
        status=PENDING,
        date_reported=datetime.now(),
    )
    db.add(maintenance_request)
    commit_or_fail(db, "Failed to add maintenance request")
    return redirect("/maintenance")


@router.post("/maintenance/complete/{request_id}")
def complete_maintenance(request_id: int, db: Session = Depends(get_db)):
    """
    Mark a request Completed and stamp its completion time.

    Only Pending rows are touched, so repeating the call keeps the first
    completion time and never moves the status back.
    """
    updated = (
        db.query(MaintenanceRequest)
        .filter(
            MaintenanceRequest.request_id == request_id,
            MaintenanceRequest.status != COMPLETED,
        )
        .update(
            {MaintenanceRequest.status: COMPLETED, MaintenanceRequest.date_completed: datetime.now()},
            synchronize_session=False,
        )
    )
    commit_or_fail(db, "Failed to complete maintenance request")
    if not updated:
        logger.info("Maintenance request %s was already completed or does not exist", request_id)
    return redirect("/maintenance")


@router.get("/maintenance/{request_id}")
def maintenance_detail(request: Request, request_id: int, db: Session = Depends(get_db)):
    row = _with_nickname(db).filter(MaintenanceRequest.request_id == request_id).first()
    return render(request, "maintenance_detail", {
        "maintenance_request": row[0] if row else None,
        "nickname": row[1] if row else None,
    })
