import pytest

from app.models import RoleEnum, StaffMember, User
from app.services import staff as staff_service
from app.services.access import MANAGE_STAFF, SCAN_TICKETS


@pytest.fixture()
def admin(make_user):
    return make_user("admin@example.com", role=RoleEnum.ADMIN)


def test_assign_staff_promotes_plain_user(db_session, admin, holder, event):
    member = staff_service.assign_staff(db_session, holder.id, event.id, admin.id)

    assert member.permissions == [SCAN_TICKETS]
    assert member.assigned_by == admin.id
    assert db_session.get(User, holder.id).role == RoleEnum.STAFF


def test_assign_staff_twice_is_rejected(db_session, admin, holder, event):
    staff_service.assign_staff(db_session, holder.id, event.id, admin.id)

    with pytest.raises(staff_service.StaffAssignmentError, match="already assigned"):
        staff_service.assign_staff(db_session, holder.id, event.id, admin.id)


def test_assign_staff_unknown_permission(db_session, admin, holder, event):
    with pytest.raises(staff_service.StaffAssignmentError, match="Unknown permission"):
        staff_service.assign_staff(
            db_session, holder.id, event.id, admin.id, permissions=["fly"]
        )


def test_remove_staff_checks_event(db_session, admin, holder, event):
    member = staff_service.assign_staff(db_session, holder.id, event.id, admin.id)

    assert staff_service.remove_staff(db_session, event.id + 1, member.id) is False
    assert staff_service.remove_staff(db_session, event.id, member.id) is True
    assert staff_service.list_event_staff(db_session, event.id) == []


def test_staff_routes_for_admin(client, db_session, admin, holder, event, auth_headers):
    headers = auth_headers(admin)

    created = client.post(
        f"/events/{event.id}/staff",
        json={"user_id": holder.id, "permissions": [SCAN_TICKETS]},
        headers=headers,
    )
    listed = client.get(f"/events/{event.id}/staff", headers=headers)
    duplicate = client.post(
        f"/events/{event.id}/staff", json={"user_id": holder.id}, headers=headers
    )

    assert created.status_code == 201
    assert created.json()["user"]["email"] == "holder@example.com"
    assert [row["user_id"] for row in listed.json()] == [holder.id]
    assert duplicate.status_code == 400

    removed = client.delete(
        f"/events/{event.id}/staff/{created.json()['id']}", headers=headers
    )
    assert removed.status_code == 204
    assert client.get(f"/events/{event.id}/staff", headers=headers).json() == []


def test_coordinator_manages_only_own_event(
    client, db_session, make_user, holder, event, auth_headers
):
    coordinator = make_user("coord@example.com", role=RoleEnum.COORDINATOR)
    db_session.add(
        StaffMember(
            user_id=coordinator.id,
            event_id=event.id,
            permissions=[MANAGE_STAFF, SCAN_TICKETS],
        )
    )
    db_session.commit()
    headers = auth_headers(coordinator)

    own = client.get(f"/events/{event.id}/staff", headers=headers)
    other = client.get(f"/events/{event.id + 1}/staff", headers=headers)

    assert own.status_code == 200
    assert other.status_code == 403


def test_scanner_staff_cannot_manage_staff(client, scanner_user, event, auth_headers):
    response = client.get(f"/events/{event.id}/staff", headers=auth_headers(scanner_user))

    assert response.status_code == 403
