import re
from decimal import Decimal

import pytest
from sqlalchemy import select

from app.models import Ticket, TicketStatusEnum, TicketType
from app.services import tickets as tickets_service


def test_generated_codes_are_eight_uppercase_alphanumerics():
    codes = {tickets_service.generate_ticket_code() for _ in range(200)}

    assert all(re.fullmatch(r"[A-Z0-9]{8}", code) for code in codes)
    assert len(codes) > 190


def test_create_order_issues_active_tickets(db_session, holder, ticket_type):
    order = tickets_service.create_order(db_session, holder.id, ticket_type.id, 3)

    tickets = db_session.execute(
        select(Ticket).where(Ticket.order_id == order.id)
    ).scalars().all()
    assert len(tickets) == 3
    assert {ticket.status for ticket in tickets} == {TicketStatusEnum.ACTIVE}
    assert len({ticket.ticket_code for ticket in tickets}) == 3
    assert order.total_amount == Decimal("75.00")
    assert order.event_id == ticket_type.event_id
    db_session.refresh(ticket_type)
    assert ticket_type.available_quantity == 97


def test_create_order_rejects_overselling(db_session, holder, ticket_type):
    ticket_type.available_quantity = 2
    db_session.commit()

    with pytest.raises(tickets_service.IssuanceError, match="Not enough tickets"):
        tickets_service.create_order(db_session, holder.id, ticket_type.id, 3)

    db_session.refresh(ticket_type)
    assert ticket_type.available_quantity == 2
    assert db_session.execute(select(Ticket)).first() is None


@pytest.mark.parametrize("quantity", [0, -1])
def test_create_order_rejects_non_positive_quantity(
    db_session, holder, ticket_type, quantity
):
    with pytest.raises(tickets_service.IssuanceError):
        tickets_service.create_order(db_session, holder.id, ticket_type.id, quantity)


def test_create_order_unknown_ticket_type(db_session, holder):
    with pytest.raises(tickets_service.IssuanceError, match="not found"):
        tickets_service.create_order(db_session, holder.id, 999, 1)


def test_issuance_skips_codes_already_taken(
    db_session, holder, ticket_type, issue_ticket, monkeypatch
):
    issue_ticket("TAKEN001")
    generated = iter(["TAKEN001", "FRESH001"])
    monkeypatch.setattr(tickets_service, "generate_ticket_code", lambda: next(generated))

    order = tickets_service.create_order(db_session, holder.id, ticket_type.id, 1)

    codes = db_session.execute(
        select(Ticket.ticket_code).where(Ticket.order_id == order.id)
    ).scalars().all()
    assert codes == ["FRESH001"]


def test_user_tickets_lists_only_active(db_session, holder, issue_ticket):
    issue_ticket("ACTV0001")
    issue_ticket("USED0001", status=TicketStatusEnum.USED)

    tickets = tickets_service.get_user_tickets(db_session, holder.id)

    assert [ticket.ticket_code for ticket in tickets] == ["ACTV0001"]


def test_ticket_types_hide_sold_out(db_session, ticket_type):
    sold_out = TicketType(
        event_id=ticket_type.event_id,
        name="Sold out",
        price=Decimal("5.00"),
        max_quantity=10,
        available_quantity=0,
    )
    db_session.add(sold_out)
    db_session.commit()

    names = [t.name for t in tickets_service.list_ticket_types(db_session)]

    assert names == ["General"]


def test_cancel_only_from_active(db_session, issue_ticket):
    active = issue_ticket("ACTV0001")
    used = issue_ticket("USED0001", status=TicketStatusEnum.USED)

    assert tickets_service.cancel_ticket(db_session, active.id) is True
    assert tickets_service.cancel_ticket(db_session, active.id) is False
    assert tickets_service.cancel_ticket(db_session, used.id) is False
    assert db_session.get(Ticket, used.id).status == TicketStatusEnum.USED
    assert db_session.get(Ticket, active.id).status == TicketStatusEnum.CANCELLED
