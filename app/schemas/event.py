from datetime import datetime

from pydantic import BaseModel


class EventRead(BaseModel):
    id: int
    name: str
    event_date: datetime
    location: str | None
    is_active: bool

    model_config = {"from_attributes": True}
