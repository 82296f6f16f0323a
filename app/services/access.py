from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import RoleEnum, StaffMember, User

SCAN_TICKETS = "scan_tickets"
MANAGE_STAFF = "manage_staff"
VIEW_REPORTS = "view_reports"

CAPABILITIES = {SCAN_TICKETS, MANAGE_STAFF, VIEW_REPORTS}
EVENT_ROLES = {RoleEnum.STAFF, RoleEnum.COORDINATOR}


def has_capability(
    db: Session, user: User, capability: str, event_id: int | None = None
) -> bool:
    """Whether ``user`` may exercise ``capability`` for ``event_id``.

    Admins hold every capability. Staff and coordinators hold a capability for
    an event only through a ``StaffMember`` assignment listing it; without an
    event, any such assignment is enough.
    """
    if capability not in CAPABILITIES or not user.is_active:
        return False
    if user.role == RoleEnum.ADMIN:
        return True
    if user.role not in EVENT_ROLES:
        return False

    stmt = select(StaffMember.permissions).where(StaffMember.user_id == user.id)
    if event_id is not None:
        stmt = stmt.where(StaffMember.event_id == event_id)
    return any(
        capability in (permissions or []) for permissions in db.scalars(stmt)
    )
