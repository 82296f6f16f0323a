from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_current_user, require_admin, require_capability
from ..db import get_db
from ..models import Ticket, User
from ..schemas import OrderCreate, OrderRead, TicketRead, TicketTypeRead
from ..services import tickets as tickets_service
from ..services.access import SCAN_TICKETS

router = APIRouter()


@router.get("/ticket-types", response_model=list[TicketTypeRead])
def ticket_types(
    event_id: int | None = None, db: Session = Depends(get_db)
) -> list[TicketTypeRead]:
    return tickets_service.list_ticket_types(db, event_id=event_id)


@router.post("/orders", response_model=OrderRead, status_code=201)
def create_order(
    payload: OrderCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> OrderRead:
    try:
        return tickets_service.create_order(
            db, user.id, payload.ticket_type_id, payload.quantity
        )
    except tickets_service.IssuanceError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/orders/mine", response_model=list[OrderRead])
def my_orders(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
) -> list[OrderRead]:
    return tickets_service.get_user_orders(db, user.id)


@router.get("/tickets/mine", response_model=list[TicketRead])
def my_tickets(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
) -> list[TicketRead]:
    return tickets_service.get_user_tickets(db, user.id)


@router.get("/tickets/{code}", response_model=TicketRead)
def ticket_by_code(
    code: str,
    user: User = Depends(require_capability(SCAN_TICKETS)),
    db: Session = Depends(get_db),
) -> TicketRead:
    ticket = tickets_service.get_ticket_by_code(db, code)
    if ticket is None:
        raise HTTPException(status_code=404, detail="Ticket not found.")
    return ticket


@router.post("/tickets/{ticket_id}/cancel", response_model=TicketRead)
def cancel_ticket(
    ticket_id: int,
    user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> TicketRead:
    if not tickets_service.cancel_ticket(db, ticket_id):
        ticket = db.get(Ticket, ticket_id)
        if ticket is None:
            raise HTTPException(status_code=404, detail="Ticket not found.")
        raise HTTPException(status_code=409, detail="Only active tickets can be cancelled.")
    return db.get(Ticket, ticket_id)
