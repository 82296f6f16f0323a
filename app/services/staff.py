import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..models import Event, RoleEnum, StaffMember, User
from .access import CAPABILITIES, SCAN_TICKETS

logger = logging.getLogger(__name__)


class StaffAssignmentError(Exception):
    pass


def assign_staff(
    db: Session,
    user_id: int,
    event_id: int,
    assigned_by: int,
    permissions: tuple[str, ...] | list[str] = (SCAN_TICKETS,),
) -> StaffMember:
    unknown = set(permissions) - CAPABILITIES
    if unknown:
        raise StaffAssignmentError(f"Unknown permission(s): {', '.join(sorted(unknown))}.")
    user = db.get(User, user_id)
    if user is None:
        raise StaffAssignmentError("User not found.")
    if db.get(Event, event_id) is None:
        raise StaffAssignmentError("Event not found.")

    member = StaffMember(
        user_id=user_id,
        event_id=event_id,
        permissions=sorted(set(permissions)),
        assigned_by=assigned_by,
    )
    db.add(member)
    if user.role == RoleEnum.USER:
        user.role = RoleEnum.STAFF
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise StaffAssignmentError("User is already assigned to this event.") from exc
    db.refresh(member)
    logger.info(
        "Assigned user_id=%s to event_id=%s permissions=%s",
        user_id,
        event_id,
        member.permissions,
    )
    return member


def list_event_staff(db: Session, event_id: int) -> list[StaffMember]:
    return list(
        db.scalars(
            select(StaffMember)
            .options(selectinload(StaffMember.user))
            .where(StaffMember.event_id == event_id)
            .order_by(StaffMember.created_at.desc(), StaffMember.id.desc())
        )
    )


def remove_staff(db: Session, event_id: int, staff_id: int) -> bool:
    member = db.get(StaffMember, staff_id)
    if member is None or member.event_id != event_id:
        return False
    db.delete(member)
    db.commit()
    logger.info("Removed staff_id=%s from event_id=%s", staff_id, event_id)
    return True
