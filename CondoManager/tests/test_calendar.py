from datetime import datetime

from CondoManager.models import CalendarEvent
from CondoManager.tests.conftest import unique


def test_add_event(auth_client, db):
    title = unique("Board meeting")
    response = auth_client.post(
        "/calendar/add",
        data={"event_title": title, "start_time": "2025-01-20T19:30"},
        follow_redirects=False,
    )
    assert response.status_code == 302
    assert response.headers["location"] == "/calendar"

    event = db.query(CalendarEvent).filter(CalendarEvent.event_title == title).first()
    assert event.start_time == datetime(2025, 1, 20, 19, 30)


def test_calendar_is_ordered_by_start_time(auth_client, db):
    token = unique("sched")
    later = CalendarEvent(event_title=f"{token} later", start_time=datetime(2024, 9, 2, 10, 0))
    sooner = CalendarEvent(event_title=f"{token} sooner", start_time=datetime(2024, 9, 1, 10, 0))
    db.add_all([later, sooner])
    db.commit()

    response = auth_client.get("/calendar", params={"search": token})
    assert [event.event_title for event in response.context["events"]] == [f"{token} sooner", f"{token} later"]


def test_calendar_search_by_weekday(auth_client, db):
    # 6 September 2024 was a Friday, the 7th a Saturday
    friday = CalendarEvent(event_title=unique("Trash pickup"), start_time=datetime(2024, 9, 6, 7, 0))
    saturday = CalendarEvent(event_title=unique("Yard sale"), start_time=datetime(2024, 9, 7, 7, 0))
    db.add_all([friday, saturday])
    db.commit()

    response = auth_client.get("/calendar", params={"search": "Friday, September"})
    titles = [event.event_title for event in response.context["events"]]
    assert friday.event_title in titles
    assert saturday.event_title not in titles


def test_invalid_start_time_renders_error_page(auth_client):
    response = auth_client.post(
        "/calendar/add",
        data={"event_title": "Board meeting", "start_time": "next tuesday"},
        follow_redirects=False,
    )
    assert response.status_code == 400
    assert response.template.name == "error.html"
    assert response.context["message"] == "Invalid input"


def test_calendar_degrades_when_store_unreachable(auth_client, store_unreachable):
    response = auth_client.get("/calendar")
    assert response.status_code == 200
    assert response.context["events"] == []
    assert response.context["error"] == "Error loading calendar events"
