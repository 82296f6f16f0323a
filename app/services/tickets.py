from decimal import Decimal
import logging
import secrets
import string

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..models import (
    Order,
    OrderStatusEnum,
    Ticket,
    TicketStatusEnum,
    TicketType,
)
from ..models.base import utcnow
from .scanner import normalize_code

logger = logging.getLogger(__name__)

TICKET_CODE_ALPHABET = string.ascii_uppercase + string.digits
TICKET_CODE_LENGTH = 8


class IssuanceError(Exception):
    pass


def generate_ticket_code() -> str:
    return "".join(
        secrets.choice(TICKET_CODE_ALPHABET) for _ in range(TICKET_CODE_LENGTH)
    )


def list_ticket_types(db: Session, event_id: int | None = None) -> list[TicketType]:
    stmt = select(TicketType).where(TicketType.available_quantity > 0)
    if event_id is not None:
        stmt = stmt.where(TicketType.event_id == event_id)
    return list(db.scalars(stmt.order_by(TicketType.price.asc(), TicketType.id)))


def create_order(
    db: Session, user_id: int, ticket_type_id: int, quantity: int
) -> Order:
    if quantity < 1:
        raise IssuanceError("Quantity must be at least 1.")
    ticket_type = db.get(TicketType, ticket_type_id)
    if ticket_type is None:
        raise IssuanceError("Ticket type not found.")

    reserved = db.execute(
        update(TicketType)
        .where(
            TicketType.id == ticket_type_id,
            TicketType.available_quantity >= quantity,
        )
        .values(available_quantity=TicketType.available_quantity - quantity)
        .execution_options(synchronize_session=False)
    )
    if reserved.rowcount != 1:
        db.rollback()
        raise IssuanceError("Not enough tickets available.")

    order = Order(
        user_id=user_id,
        event_id=ticket_type.event_id,
        total_amount=Decimal(ticket_type.price) * quantity,
        status=OrderStatusEnum.COMPLETED,
        created_at=utcnow(),
    )
    db.add(order)
    db.flush()
    db.add_all(
        Ticket(
            ticket_code=code,
            user_id=user_id,
            ticket_type_id=ticket_type_id,
            order_id=order.id,
            status=TicketStatusEnum.ACTIVE,
        )
        for code in _unique_codes(db, quantity)
    )
    try:
        db.commit()
    except IntegrityError as exc:
        # A code was taken between the check and the insert.
        db.rollback()
        raise IssuanceError("Could not allocate unique ticket codes, retry.") from exc
    db.refresh(order)
    logger.info(
        "Issued %s ticket(s) for order_id=%s user_id=%s ticket_type_id=%s",
        quantity,
        order.id,
        user_id,
        ticket_type_id,
    )
    return order


def _unique_codes(db: Session, count: int) -> list[str]:
    codes: set[str] = set()
    for _ in range(settings.ticket_code_attempts):
        candidates = {generate_ticket_code() for _ in range(count - len(codes))}
        taken = set(
            db.scalars(select(Ticket.ticket_code).where(Ticket.ticket_code.in_(candidates)))
        )
        codes |= candidates - taken
        if len(codes) == count:
            return sorted(codes)
    raise IssuanceError("Could not allocate unique ticket codes, retry.")


def get_user_orders(db: Session, user_id: int) -> list[Order]:
    return list(
        db.scalars(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
    )


def get_user_tickets(db: Session, user_id: int) -> list[Ticket]:
    return list(
        db.scalars(
            select(Ticket)
            .where(Ticket.user_id == user_id, Ticket.status == TicketStatusEnum.ACTIVE)
            .order_by(Ticket.created_at.desc(), Ticket.id.desc())
        )
    )


def get_ticket_by_code(db: Session, code: str) -> Ticket | None:
    return db.execute(
        select(Ticket).where(Ticket.ticket_code == normalize_code(code))
    ).scalar_one_or_none()


def cancel_ticket(db: Session, ticket_id: int) -> bool:
    now = utcnow()
    result = db.execute(
        update(Ticket)
        .where(Ticket.id == ticket_id, Ticket.status == TicketStatusEnum.ACTIVE)
        .values(status=TicketStatusEnum.CANCELLED, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    cancelled = result.rowcount == 1
    if cancelled:
        logger.info("Cancelled ticket_id=%s", ticket_id)
    return cancelled
