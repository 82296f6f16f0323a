from datetime import datetime

from pydantic import BaseModel

from ..services.access import SCAN_TICKETS


class StaffAssign(BaseModel):
    user_id: int
    permissions: list[str] = [SCAN_TICKETS]


class StaffUser(BaseModel):
    id: int
    email: str
    name: str

    model_config = {"from_attributes": True}


class StaffMemberRead(BaseModel):
    id: int
    user_id: int
    event_id: int
    permissions: list[str]
    assigned_by: int | None
    created_at: datetime
    user: StaffUser

    model_config = {"from_attributes": True}
