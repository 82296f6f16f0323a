from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ..models import OrderStatusEnum, TicketStatusEnum


class TicketTypeRead(BaseModel):
    id: int
    event_id: int
    name: str
    price: Decimal
    description: str | None
    max_quantity: int
    available_quantity: int

    model_config = {"from_attributes": True}


class OrderCreate(BaseModel):
    ticket_type_id: int
    quantity: int = Field(ge=1, le=20)


class TicketRead(BaseModel):
    id: int
    ticket_code: str
    status: TicketStatusEnum
    ticket_type_id: int
    order_id: int
    created_at: datetime
    used_at: datetime | None

    model_config = {"from_attributes": True}


class OrderRead(BaseModel):
    id: int
    user_id: int
    event_id: int
    total_amount: Decimal
    status: OrderStatusEnum
    created_at: datetime

    model_config = {"from_attributes": True}
