from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, str_enum, utcnow


class TicketStatusEnum(str, Enum):
    ACTIVE = "active"
    USED = "used"
    CANCELLED = "cancelled"


class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        Index("ix_tickets_status", "status"),
        Index("ix_tickets_user_id", "user_id"),
        Index("ix_tickets_order_id", "order_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    ticket_code: Mapped[str] = mapped_column(String(8), unique=True, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    ticket_type_id: Mapped[int] = mapped_column(
        ForeignKey("ticket_types.id"), nullable=False
    )
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id"), nullable=False)
    status: Mapped[TicketStatusEnum] = mapped_column(
        str_enum(TicketStatusEnum),
        nullable=False,
        default=TicketStatusEnum.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )
    used_at: Mapped[datetime | None] = mapped_column(DateTime)
    owner: Mapped["User"] = relationship("User")
    ticket_type: Mapped["TicketType"] = relationship("TicketType")
