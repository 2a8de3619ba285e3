from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.orm import Session

from CondoManager.database import get_db
from CondoManager.errors import commit_or_fail, fetch_all
from CondoManager.models import Expense, Property
from CondoManager.routes.auth import get_current_user
from CondoManager.search import apply_search, date_field, text_field
from CondoManager.templating import redirect, render

router = APIRouter(dependencies=[Depends(get_current_user)])

EXPENSE_SEARCH_FIELDS = [
    text_field(Expense.vendor),
    text_field(Expense.expense_category),
    text_field(Property.nickname),
    date_field(Expense.expense_date),
]


@router.get("/expenses")
def list_expenses(request: Request, search: Optional[str] = None, db: Session = Depends(get_db)):
    """
    List expenses with their unit nickname, newest first.

    Args:
        request (Request): The incoming request.
        search (str, optional): Matched against vendor, category, unit
            nickname and the rendered expense date.
        db (Session): The database session.

    Returns:
        TemplateResponse: The rendered expense list.
    """
    query = (
        db.query(Expense, Property.nickname)
        .join(Property, Expense.property_id == Property.property_id)
    )
    query = apply_search(query, EXPENSE_SEARCH_FIELDS, search)
    query = query.order_by(Expense.expense_date.desc(), Expense.expense_id.desc())
    result = fetch_all(db, query, "Error loading expenses")
    total = sum((expense.amount or Decimal("0") for expense, _ in result.rows), Decimal("0"))
    return render(request, "expenses_month", {
        "expenses": result.rows,
        "total": total,
        "searchTerm": search,
        "error": result.error,
    })


@router.get("/expenses/new")
def new_expense(request: Request, db: Session = Depends(get_db)):
    properties = (
        db.query(Property.property_id, Property.nickname)
        .order_by(Property.nickname)
        .all()
    )
    return render(request, "expense_new", {"properties": properties})


@router.post("/expenses/add")
def add_expense(
    property_id: int = Form(...),
    expense_category: str = Form(...),
    amount: Decimal = Form(...),
    expense_date: date = Form(...),
    vendor: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    expense = Expense(
        property_id=property_id,
        expense_category=expense_category.strip(),
        amount=amount,
        expense_date=expense_date,
        vendor=vendor.strip() if vendor else None,
    )
    db.add(expense)
    commit_or_fail(db, "Failed to add expense")
    return redirect("/expenses")
