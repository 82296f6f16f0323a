from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import select

from .db import SessionLocal
from .models import Event, RoleEnum, TicketType, User
from .models.base import utcnow


SEED_ADMIN = {"email": "admin@example.com", "name": "Admin", "role": RoleEnum.ADMIN}
SEED_EVENT = {"name": "Demo Night", "location": "Main Hall"}
SEED_TICKET_TYPES = [
    {"name": "General", "price": Decimal("25.00"), "max_quantity": 200},
    {"name": "VIP", "price": Decimal("80.00"), "max_quantity": 20},
]


def seed_demo() -> dict[str, int]:
    now = utcnow()
    created = {"users": 0, "events": 0, "ticket_types": 0}
    with SessionLocal() as session:
        admin = session.execute(
            select(User).where(User.email == SEED_ADMIN["email"])
        ).scalar_one_or_none()
        if admin is None:
            session.add(User(**SEED_ADMIN, is_active=True, created_at=now))
            created["users"] += 1

        event = session.execute(
            select(Event).where(Event.name == SEED_EVENT["name"])
        ).scalar_one_or_none()
        if event is None:
            event = Event(
                **SEED_EVENT,
                event_date=_next_saturday(now),
                is_active=True,
                created_at=now,
            )
            session.add(event)
            session.flush()
            created["events"] += 1

        for entry in SEED_TICKET_TYPES:
            exists = session.execute(
                select(TicketType).where(
                    TicketType.event_id == event.id,
                    TicketType.name == entry["name"],
                )
            ).scalar_one_or_none()
            if exists:
                continue
            session.add(
                TicketType(
                    event_id=event.id,
                    available_quantity=entry["max_quantity"],
                    **entry,
                )
            )
            created["ticket_types"] += 1
        if any(created.values()):
            session.commit()
    return created


def _next_saturday(now: datetime) -> datetime:
    days_ahead = (5 - now.weekday()) % 7 or 7
    return (now + timedelta(days=days_ahead)).replace(
        hour=20, minute=0, second=0, microsecond=0
    )


def main() -> None:
    created = seed_demo()
    print(
        "Seeded users: {users}, events: {events}, ticket types: {ticket_types}".format(
            **created
        )
    )


if __name__ == "__main__":
    main()
