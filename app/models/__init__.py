from .base import Base
from .event import Event, TicketType
from .order import Order, OrderStatusEnum
from .staff_member import StaffMember
from .ticket import Ticket, TicketStatusEnum
from .ticket_scan import ScanResultEnum, TicketScan
from .user import RoleEnum, User

__all__ = [
    "Base",
    "Event",
    "TicketType",
    "Order",
    "OrderStatusEnum",
    "StaffMember",
    "Ticket",
    "TicketStatusEnum",
    "TicketScan",
    "ScanResultEnum",
    "User",
    "RoleEnum",
]
