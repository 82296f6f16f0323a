import logging

from fastapi import APIRouter, Depends, Form, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from ..auth import require_capability
from ..config import settings
from ..db import get_db
from ..models import ScanResultEnum, User
from ..schemas import DecodedRead, ScanOutcomeRead, ScanRequest
from ..services import scanner
from ..services.access import SCAN_TICKETS
from ..services.history import get_scan_history
from ..services.read_filter import ConsecutiveReadFilter

router = APIRouter()
templates = Jinja2Templates(directory="app/templates")
logger = logging.getLogger(__name__)

RESULT_STYLES = {
    ScanResultEnum.SUCCESS.value: "scan-success",
    ScanResultEnum.ALREADY_USED.value: "scan-already-used",
    ScanResultEnum.INVALID.value: "scan-invalid",
}

can_scan = require_capability(SCAN_TICKETS)


@router.get("/scanner", response_class=HTMLResponse)
def scanner_page(
    request: Request,
    event_id: int | None = None,
    user: User = Depends(can_scan),
    db: Session = Depends(get_db),
) -> HTMLResponse:
    history = get_scan_history(
        db, event_id=event_id, scanned_by=user.id, limit=settings.scan_history_limit
    )
    return templates.TemplateResponse(request, 
        "scanner/index.html",
        {
            "request": request,
            "user": user,
            "event_id": event_id,
            "history": history,
            "result_styles": RESULT_STYLES,
        },
    )


@router.post("/scanner/scan", response_class=HTMLResponse)
def scanner_scan(
    request: Request,
    code: str = Form(""),
    location: str | None = Form(None),
    device_info: str | None = Form(None),
    user: User = Depends(can_scan),
    db: Session = Depends(get_db),
) -> HTMLResponse:
    if not code.strip():
        return _render_result(
            request, None, errors=["Ticket code is required."], status_code=400
        )
    return _scan_and_render(
        request,
        db,
        user,
        code,
        location,
        device_info or request.headers.get("user-agent"),
    )


@router.post("/scanner/decoded", response_class=HTMLResponse)
def scanner_decoded(
    request: Request,
    payload: DecodedRead,
    user: User = Depends(can_scan),
    db: Session = Depends(get_db),
) -> Response:
    read_filter = request.app.state.read_filters.for_scanner(user.id)
    if not read_filter.accept(payload.code):
        return Response(status_code=204)
    return _scan_and_render(
        request,
        db,
        user,
        payload.code,
        payload.location,
        payload.device_info or request.headers.get("user-agent"),
        read_filter=read_filter,
    )


@router.post("/scanner/decoded/reset", status_code=204)
def scanner_decoded_reset(request: Request, user: User = Depends(can_scan)) -> Response:
    request.app.state.read_filters.reset(user.id)
    return Response(status_code=204)


@router.get("/scanner/history", response_class=HTMLResponse)
def scanner_history(
    request: Request,
    event_id: int | None = None,
    user: User = Depends(can_scan),
    db: Session = Depends(get_db),
) -> HTMLResponse:
    history = get_scan_history(
        db, event_id=event_id, scanned_by=user.id, limit=settings.scan_history_limit
    )
    return templates.TemplateResponse(request, 
        "scanner/_history.html",
        {"request": request, "history": history, "result_styles": RESULT_STYLES},
    )


@router.post("/api/scans", response_model=ScanOutcomeRead)
def api_scan(
    payload: ScanRequest,
    user: User = Depends(can_scan),
    db: Session = Depends(get_db),
) -> ScanOutcomeRead:
    try:
        outcome = scanner.scan(
            db,
            payload.code,
            scanned_by=user.id,
            location=payload.location,
            device_info=payload.device_info,
        )
    except scanner.StorageUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return ScanOutcomeRead.model_validate(outcome)


def _scan_and_render(
    request: Request,
    db: Session,
    user: User,
    code: str,
    location: str | None,
    device_info: str | None,
    read_filter: ConsecutiveReadFilter | None = None,
) -> HTMLResponse:
    try:
        outcome = scanner.scan(
            db, code, scanned_by=user.id, location=location, device_info=device_info
        )
    except scanner.StorageUnavailable:
        if read_filter is not None:
            # The attempt is indeterminate; the next read of this code must go through.
            read_filter.forget(code)
        return _render_result(
            request,
            None,
            errors=["Could not reach the ticket store. Scan the ticket again."],
            status_code=503,
        )
    return _render_result(request, outcome)


def _render_result(
    request: Request,
    outcome: scanner.ScanOutcome | None,
    errors: list[str] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(request, 
        "scanner/_result.html",
        {
            "request": request,
            "outcome": outcome,
            "errors": errors or [],
            "result_styles": RESULT_STYLES,
        },
        status_code=status_code,
    )
