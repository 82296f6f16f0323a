import os

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.auth import create_token
from app.db import get_db
from app.main import app
from app.models.base import utcnow
from app.models import (
    Base,
    Event,
    Order,
    OrderStatusEnum,
    RoleEnum,
    StaffMember,
    Ticket,
    TicketStatusEnum,
    TicketType,
    User,
)
from app.services.read_filter import ReadFilterRegistry


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(SessionLocal):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.read_filters = ReadFilterRegistry()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db_session):
    def factory(email: str, role: RoleEnum = RoleEnum.USER, is_active: bool = True):
        user = User(email=email, name=email.split("@")[0].title(), role=role, is_active=is_active)
        db_session.add(user)
        db_session.commit()
        return user

    return factory


@pytest.fixture()
def event(db_session):
    event = Event(name="Test Night", event_date=utcnow() + timedelta(days=30))
    db_session.add(event)
    db_session.commit()
    return event


@pytest.fixture()
def ticket_type(db_session, event):
    ticket_type = TicketType(
        event_id=event.id,
        name="General",
        price=Decimal("25.00"),
        max_quantity=100,
        available_quantity=100,
    )
    db_session.add(ticket_type)
    db_session.commit()
    return ticket_type


@pytest.fixture()
def holder(make_user):
    return make_user("holder@example.com")


@pytest.fixture()
def scanner_user(db_session, make_user, event):
    user = make_user("door@example.com", role=RoleEnum.STAFF)
    db_session.add(
        StaffMember(user_id=user.id, event_id=event.id, permissions=["scan_tickets"])
    )
    db_session.commit()
    return user


@pytest.fixture()
def issue_ticket(db_session, holder, ticket_type):
    def factory(code: str, status: TicketStatusEnum = TicketStatusEnum.ACTIVE):
        order = Order(
            user_id=holder.id,
            event_id=ticket_type.event_id,
            total_amount=ticket_type.price,
            status=OrderStatusEnum.COMPLETED,
        )
        db_session.add(order)
        db_session.flush()
        ticket = Ticket(
            ticket_code=code,
            user_id=holder.id,
            ticket_type_id=ticket_type.id,
            order_id=order.id,
            status=status,
        )
        db_session.add(ticket)
        db_session.commit()
        return ticket

    return factory


@pytest.fixture()
def auth_headers():
    def factory(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_token(user.id)}"}

    return factory
