from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..auth import require_capability
from ..db import get_db
from ..models import User
from ..schemas import StaffAssign, StaffMemberRead
from ..services import staff as staff_service
from ..services.access import MANAGE_STAFF

router = APIRouter()

can_manage_staff = require_capability(MANAGE_STAFF)


@router.get("/events/{event_id}/staff", response_model=list[StaffMemberRead])
def event_staff(
    event_id: int,
    user: User = Depends(can_manage_staff),
    db: Session = Depends(get_db),
) -> list[StaffMemberRead]:
    return staff_service.list_event_staff(db, event_id)


@router.post(
    "/events/{event_id}/staff", response_model=StaffMemberRead, status_code=201
)
def assign_event_staff(
    event_id: int,
    payload: StaffAssign,
    user: User = Depends(can_manage_staff),
    db: Session = Depends(get_db),
) -> StaffMemberRead:
    try:
        return staff_service.assign_staff(
            db,
            payload.user_id,
            event_id,
            assigned_by=user.id,
            permissions=payload.permissions,
        )
    except staff_service.StaffAssignmentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/events/{event_id}/staff/{staff_id}", status_code=204)
def remove_event_staff(
    event_id: int,
    staff_id: int,
    user: User = Depends(can_manage_staff),
    db: Session = Depends(get_db),
) -> Response:
    if not staff_service.remove_staff(db, event_id, staff_id):
        raise HTTPException(status_code=404, detail="Staff assignment not found.")
    return Response(status_code=204)
