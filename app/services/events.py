import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..models import Event
from ..models.base import utcnow

logger = logging.getLogger(__name__)


def expire_past_events(db: Session) -> int:
    result = db.execute(
        update(Event)
        .where(Event.event_date < utcnow(), Event.is_active.is_(True))
        .values(is_active=False)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount:
        logger.info("Marked %s past event(s) inactive", result.rowcount)
    return result.rowcount


def list_active_events(db: Session) -> list[Event]:
    expire_past_events(db)
    return list(
        db.scalars(
            select(Event)
            .where(Event.is_active.is_(True))
            .order_by(Event.event_date.asc(), Event.id)
        )
    )


def get_event(db: Session, event_id: int) -> Event | None:
    return db.get(Event, event_id)
