from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, str_enum, utcnow


class ScanResultEnum(str, Enum):
    SUCCESS = "success"
    ALREADY_USED = "already_used"
    INVALID = "invalid"


class TicketScan(Base):
    __tablename__ = "ticket_scans"
    __table_args__ = (
        Index("ix_ticket_scans_ticket_id", "ticket_id"),
        Index("ix_ticket_scans_scanned_by", "scanned_by"),
        Index("ix_ticket_scans_scanned_at", "scanned_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    ticket_id: Mapped[int | None] = mapped_column(ForeignKey("tickets.id"))
    scanned_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    scanned_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False
    )
    scanned_code: Mapped[str] = mapped_column(String(64), nullable=False)
    scan_location: Mapped[str | None] = mapped_column(Text)
    device_info: Mapped[str | None] = mapped_column(Text)
    scan_result: Mapped[ScanResultEnum] = mapped_column(
        str_enum(ScanResultEnum),
        nullable=False,
    )
    ticket: Mapped["Ticket | None"] = relationship("Ticket")
