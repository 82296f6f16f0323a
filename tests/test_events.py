from datetime import timedelta

from app.models import Event
from app.models.base import utcnow
from app.services import events as events_service


def _add_event(db_session, name, days, is_active=True):
    event = Event(name=name, event_date=utcnow() + timedelta(days=days), is_active=is_active)
    db_session.add(event)
    db_session.commit()
    return event


def test_expire_past_events_marks_only_past_active_events(db_session, event):
    past = _add_event(db_session, "Last Week", -7)
    _add_event(db_session, "Already Closed", -30, is_active=False)

    assert events_service.expire_past_events(db_session) == 1
    db_session.refresh(past)
    db_session.refresh(event)
    assert past.is_active is False
    assert event.is_active is True
    assert events_service.expire_past_events(db_session) == 0


def test_list_active_events_orders_by_date(db_session, event):
    soon = _add_event(db_session, "Next Week", 7)
    _add_event(db_session, "Yesterday", -1)

    listed = events_service.list_active_events(db_session)

    assert [row.id for row in listed] == [soon.id, event.id]


def test_events_route_hides_past_events(client, db_session, event):
    past = _add_event(db_session, "Yesterday", -1)
    past_id = past.id

    response = client.get("/events")

    assert response.status_code == 200
    assert [row["name"] for row in response.json()] == ["Test Night"]
    db_session.expire_all()
    assert db_session.get(Event, past_id).is_active is False


def test_event_detail(client, event):
    response = client.get(f"/events/{event.id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Test Night"
    assert response.json()["is_active"] is True


def test_event_detail_unknown_is_404(client):
    response = client.get("/events/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Event not found."
