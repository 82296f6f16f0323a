from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import EventRead
from ..services import events as events_service

router = APIRouter()


@router.get("/events", response_model=list[EventRead])
def list_events(db: Session = Depends(get_db)) -> list[EventRead]:
    return events_service.list_active_events(db)


@router.get("/events/{event_id}", response_model=EventRead)
def event_detail(event_id: int, db: Session = Depends(get_db)) -> EventRead:
    event = events_service.get_event(db, event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found.")
    return event
