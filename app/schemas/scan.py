from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ..models import ScanResultEnum, TicketStatusEnum


class ScanRequest(BaseModel):
    code: str = Field(max_length=255)
    location: str | None = None
    device_info: str | None = None

    @field_validator("code")
    @classmethod
    def code_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Ticket code is required.")
        return value


class DecodedRead(BaseModel):
    code: str
    location: str | None = None
    device_info: str | None = None


class ScannedTicket(BaseModel):
    id: int
    ticket_code: str
    status: TicketStatusEnum
    user_id: int
    ticket_type_id: int
    order_id: int
    used_at: datetime | None

    model_config = {"from_attributes": True}


class TicketScanRead(BaseModel):
    id: int
    ticket_id: int | None
    scanned_by: int
    scanned_at: datetime
    scanned_code: str
    scan_location: str | None
    device_info: str | None
    scan_result: ScanResultEnum

    model_config = {"from_attributes": True}


class ScanOutcomeRead(BaseModel):
    result: ScanResultEnum
    message: str
    ticket: ScannedTicket | None
    scan: TicketScanRead | None
    audit_recorded: bool

    model_config = {"from_attributes": True}
