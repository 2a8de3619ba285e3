from datetime import datetime

import pytest

from CondoManager.constants import PENDING, COMPLETED
from CondoManager.models import MaintenanceRequest, Property
from CondoManager.tests.conftest import unique


@pytest.fixture
def unit(db, user):
    unit = Property(user_id=user.user_id, nickname=unique("Maint"))
    db.add(unit)
    db.commit()
    db.refresh(unit)
    return unit


def _add_request(db, unit, description, reported, status=PENDING):
    request = MaintenanceRequest(
        property_id=unit.property_id,
        description=description,
        status=status,
        date_reported=reported,
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


def test_new_request_form_lists_units(auth_client, unit):
    response = auth_client.get("/maintenance/new")
    assert response.status_code == 200
    assert unit.property_id in [row.property_id for row in response.context["properties"]]


def test_add_request_starts_pending_and_reported_now(auth_client, unit, db):
    description = unique("Leaky faucet")
    before = datetime.now()
    response = auth_client.post(
        "/maintenance/add",
        data={"property_id": unit.property_id, "description": description},
        follow_redirects=False,
    )
    assert response.status_code == 302
    assert response.headers["location"] == "/maintenance"

    created = db.query(MaintenanceRequest).filter(MaintenanceRequest.description == description).first()
    assert created.status == PENDING
    assert created.date_completed is None
    assert created.date_reported >= before.replace(microsecond=0)


def test_complete_is_idempotent(auth_client, unit, db):
    request = _add_request(db, unit, unique("Broken door"), datetime(2025, 3, 4, 9, 30))

    first = auth_client.post(f"/maintenance/complete/{request.request_id}", follow_redirects=False)
    assert first.status_code == 302
    assert first.headers["location"] == "/maintenance"

    db.expire_all()
    completed = db.query(MaintenanceRequest).filter(MaintenanceRequest.request_id == request.request_id).first()
    assert completed.status == COMPLETED
    stamped = completed.date_completed
    assert stamped is not None

    second = auth_client.post(f"/maintenance/complete/{request.request_id}", follow_redirects=False)
    assert second.status_code == 302

    db.expire_all()
    again = db.query(MaintenanceRequest).filter(MaintenanceRequest.request_id == request.request_id).first()
    assert again.status == COMPLETED
    assert again.date_completed == stamped


def test_complete_unknown_request_is_a_no_op(auth_client):
    response = auth_client.post("/maintenance/complete/999999", follow_redirects=False)
    assert response.status_code == 302


def test_list_is_newest_first_with_nickname(auth_client, unit, db):
    older = _add_request(db, unit, unique("older"), datetime(2024, 1, 5, 8, 0))
    newer = _add_request(db, unit, unique("newer"), datetime(2024, 2, 5, 8, 0))

    response = auth_client.get("/maintenance", params={"search": unit.nickname})
    rows = response.context["requests"]
    ids = [item.request_id for item, _ in rows]
    assert ids.index(newer.request_id) < ids.index(older.request_id)
    assert all(nickname == unit.nickname for _, nickname in rows)


def test_search_by_month_name(auth_client, unit, db):
    token = unique("hvac")
    december = _add_request(db, unit, f"{token} furnace", datetime(2024, 12, 3, 10, 0))
    march = _add_request(db, unit, f"{token} filter", datetime(2024, 3, 3, 10, 0))

    response = auth_client.get("/maintenance", params={"search": "December"})
    rows = response.context["requests"]
    ids = [item.request_id for item, _ in rows]
    assert december.request_id in ids
    assert march.request_id not in ids
    assert all(item.date_reported.month == 12 for item, _ in rows)


def test_search_by_weekday_year_and_status(auth_client, unit, db):
    # 3 December 2024 was a Tuesday
    tuesday = _add_request(db, unit, unique("tile"), datetime(2024, 12, 3, 10, 0))
    done = _add_request(db, unit, unique("paint"), datetime(2023, 6, 1, 10, 0), status=COMPLETED)

    by_weekday = auth_client.get("/maintenance", params={"search": "tuesday"})
    assert tuesday.request_id in [item.request_id for item, _ in by_weekday.context["requests"]]

    by_year = auth_client.get("/maintenance", params={"search": "2023"})
    assert done.request_id in [item.request_id for item, _ in by_year.context["requests"]]
    assert tuesday.request_id not in [item.request_id for item, _ in by_year.context["requests"]]

    by_status = auth_client.get("/maintenance", params={"search": "completed"})
    statuses = {item.status for item, _ in by_status.context["requests"]}
    assert statuses == {COMPLETED}


def test_detail_joins_nickname(auth_client, unit, db):
    request = _add_request(db, unit, unique("window"), datetime(2024, 5, 1, 12, 0))

    response = auth_client.get(f"/maintenance/{request.request_id}")
    assert response.status_code == 200
    assert response.context["maintenance_request"].request_id == request.request_id
    assert response.context["nickname"] == unit.nickname


def test_missing_detail_renders_empty(auth_client):
    response = auth_client.get("/maintenance/999999")
    assert response.status_code == 200
    assert response.context["maintenance_request"] is None
    assert "Request not found" in response.text


def test_blank_description_is_rejected(auth_client, unit, db):
    response = auth_client.post(
        "/maintenance/add",
        data={"property_id": unit.property_id, "description": "  \t "},
        follow_redirects=False,
    )
    assert response.status_code == 400
    assert response.template.name == "error.html"
    assert response.context["message"] == "Description is required"
    assert db.query(MaintenanceRequest).filter(MaintenanceRequest.property_id == unit.property_id).count() == 0


def test_maintenance_list_degrades_when_store_unreachable(auth_client, store_unreachable):
    response = auth_client.get("/maintenance", params={"search": "leak"})
    assert response.status_code == 200
    assert response.context["requests"] == []
    assert response.context["searchTerm"] == "leak"
    assert response.context["error"] == "Error loading maintenance requests"
