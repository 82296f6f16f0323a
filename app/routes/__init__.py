from fastapi import APIRouter

from .events import router as events_router
from .scanner import router as scanner_router
from .staff import router as staff_router
from .tickets import router as tickets_router

api_router = APIRouter()
api_router.include_router(events_router, tags=["events"])
api_router.include_router(scanner_router, tags=["scanner"])
api_router.include_router(staff_router, tags=["staff"])
api_router.include_router(tickets_router, tags=["tickets"])
