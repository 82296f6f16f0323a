from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from ..models import Ticket, TicketScan, TicketType


def get_scan_history(
    db: Session,
    event_id: int | None = None,
    scanned_by: int | None = None,
    limit: int = 50,
) -> list[TicketScan]:
    stmt = select(TicketScan).options(joinedload(TicketScan.ticket))
    if event_id is not None:
        stmt = (
            stmt.join(Ticket, TicketScan.ticket_id == Ticket.id)
            .join(TicketType, Ticket.ticket_type_id == TicketType.id)
            .where(TicketType.event_id == event_id)
        )
    if scanned_by is not None:
        stmt = stmt.where(TicketScan.scanned_by == scanned_by)
    stmt = stmt.order_by(TicketScan.scanned_at.desc(), TicketScan.id.desc())
    return list(db.scalars(stmt.limit(max(limit, 1))))
