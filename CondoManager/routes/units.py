import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.orm import Session

from CondoManager.constants import DEFAULT_PROPERTY_TYPE
from CondoManager.database import get_db
from CondoManager.errors import commit_or_fail, fetch_all, required_text
from CondoManager.models import Property
from CondoManager.routes.auth import get_current_user
from CondoManager.search import apply_search, text_field
from CondoManager.templating import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])

# Units carry no dates, so only text columns are searched
UNIT_SEARCH_FIELDS = [
    text_field(Property.nickname),
    text_field(Property.city),
    text_field(Property.state),
]


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _get_unit(db: Session, property_id: int) -> Optional[Property]:
    return db.query(Property).filter(Property.property_id == property_id).first()


@router.get("/units")
def list_units(request: Request, search: Optional[str] = None, db: Session = Depends(get_db)):
    """
    List all units, optionally narrowed by a search term.

    Args:
        request (Request): The incoming request.
        search (str, optional): Matched against nickname, city and state.
        db (Session): The database session.

    Returns:
        TemplateResponse: The rendered unit list.
    """
    query = apply_search(db.query(Property), UNIT_SEARCH_FIELDS, search)
    result = fetch_all(db, query.order_by(Property.property_id), "Error loading properties")
    return render(request, "units_list", {
        "properties": result.rows,
        "searchTerm": search,
        "error": result.error,
    })


@router.post("/units/add")
def add_unit(
    nickname: str = Form(...),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    street: Optional[str] = Form(None),
    zip: Optional[str] = Form(None),
    property_type: Optional[str] = Form(None),
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    unit = Property(
        user_id=current_user["user_id"],
        nickname=required_text(nickname, "Unit nickname is required"),
        city=_blank_to_none(city),
        state=_blank_to_none(state),
        street=_blank_to_none(street),
        zip=_blank_to_none(zip),
        property_type=_blank_to_none(property_type) or DEFAULT_PROPERTY_TYPE,
    )
    db.add(unit)
    commit_or_fail(db, "Failed to add property")
    logger.info("Property %s added by user %s", unit.property_id, current_user["user_id"])
    return redirect("/units")


@router.get("/units/edit/{property_id}")
def edit_unit_form(request: Request, property_id: int, db: Session = Depends(get_db)):
    return render(request, "unit_edit", {"unit": _get_unit(db, property_id)})


@router.post("/units/edit/{property_id}")
def edit_unit(
    property_id: int,
    nickname: str = Form(...),
    property_type: Optional[str] = Form(None),
    street: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    zip: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    """
    Overwrite every editable field of a unit.

    Last write wins; a missing unit is a no-op.
    """
    db.query(Property).filter(Property.property_id == property_id).update(
        {
            Property.nickname: required_text(nickname, "Unit nickname is required"),
            Property.property_type: _blank_to_none(property_type) or DEFAULT_PROPERTY_TYPE,
            Property.street: _blank_to_none(street),
            Property.city: _blank_to_none(city),
            Property.state: _blank_to_none(state),
            Property.zip: _blank_to_none(zip),
        },
        synchronize_session=False,
    )
    commit_or_fail(db, "Failed to update property")
    return redirect(f"/units/{property_id}")


@router.post("/units/delete/{property_id}")
def delete_unit(property_id: int, db: Session = Depends(get_db)):
    deleted = (
        db.query(Property)
        .filter(Property.property_id == property_id)
        .delete(synchronize_session=False)
    )
    commit_or_fail(db, "Failed to delete property")
    logger.info("Deleted %s property row(s) for id %s", deleted, property_id)
    return redirect("/units")


@router.get("/units/{property_id}")
def unit_detail(request: Request, property_id: int, db: Session = Depends(get_db)):
    # A missing unit renders an empty detail page, not a 404
    return render(request, "unit_detail", {"unit": _get_unit(db, property_id)})
