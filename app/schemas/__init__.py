from .event import EventRead
from .scan import (
    DecodedRead,
    ScanOutcomeRead,
    ScannedTicket,
    ScanRequest,
    TicketScanRead,
)
from .staff import StaffAssign, StaffMemberRead
from .ticket import OrderCreate, OrderRead, TicketRead, TicketTypeRead

__all__ = [
    "EventRead",
    "DecodedRead",
    "ScanOutcomeRead",
    "ScannedTicket",
    "ScanRequest",
    "TicketScanRead",
    "StaffAssign",
    "StaffMemberRead",
    "OrderCreate",
    "OrderRead",
    "TicketRead",
    "TicketTypeRead",
]
