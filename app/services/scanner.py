"""Ticket redemption.

A scan classifies a presented code as ``success``, ``already_used`` or
``invalid`` and writes one ``TicketScan`` row for every call. The only path
that moves a ticket from active to used is the conditional update in
``_claim``; two sessions racing on the same code cannot both win it.
"""
from dataclasses import dataclass
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import ScanResultEnum, Ticket, TicketScan, TicketStatusEnum
from ..models.base import utcnow

logger = logging.getLogger(__name__)

SCANNED_CODE_MAX_LENGTH = 64

RESULT_MESSAGES = {
    ScanResultEnum.SUCCESS: "Ticket valid. Entry granted.",
    ScanResultEnum.ALREADY_USED: "Ticket already used.",
    ScanResultEnum.INVALID: "Ticket not found or not valid.",
}


class StorageUnavailable(Exception):
    """The ticket store could not be read or written; the scan is indeterminate."""


@dataclass(frozen=True)
class ScanOutcome:
    result: ScanResultEnum
    ticket: Ticket | None
    scan: TicketScan | None
    audit_recorded: bool = True

    @property
    def message(self) -> str:
        return RESULT_MESSAGES[self.result]


def normalize_code(code: str) -> str:
    return code.strip().upper()


def scan(
    db: Session,
    code: str,
    scanned_by: int,
    location: str | None = None,
    device_info: str | None = None,
) -> ScanOutcome:
    normalized = normalize_code(code)
    context = {
        "code": normalized,
        "scanned_by": scanned_by,
        "location": location,
        "device_info": device_info,
    }
    try:
        ticket = _find_ticket(db, normalized)
        if ticket is None:
            return _reject(db, None, ScanResultEnum.INVALID, context)

        if ticket.status == TicketStatusEnum.ACTIVE:
            ticket_id = ticket.id
            if _claim(db, ticket_id):
                return _redeemed(db, ticket, ticket_id, context)
            # Another scan redeemed (or cancelled) it after our read.
            logger.info("Lost redemption race for ticket_id=%s", ticket_id)
            ticket = db.get(Ticket, ticket_id, populate_existing=True)
            if ticket is None:
                return _reject(db, None, ScanResultEnum.INVALID, context)

        if ticket.status == TicketStatusEnum.USED:
            return _reject(db, ticket, ScanResultEnum.ALREADY_USED, context)
        return _reject(db, ticket, ScanResultEnum.INVALID, context)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Ticket store unavailable while scanning code=%s", normalized)
        raise StorageUnavailable("Ticket store unavailable; retry the scan.") from exc


def _find_ticket(db: Session, code: str) -> Ticket | None:
    return db.execute(
        select(Ticket).where(Ticket.ticket_code == code)
    ).scalar_one_or_none()


def _claim(db: Session, ticket_id: int) -> bool:
    now = utcnow()
    result = db.execute(
        update(Ticket)
        .where(Ticket.id == ticket_id, Ticket.status == TicketStatusEnum.ACTIVE)
        .values(status=TicketStatusEnum.USED, used_at=now, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount == 1


def _record(
    db: Session, ticket_id: int | None, result: ScanResultEnum, context: dict
) -> TicketScan:
    row = TicketScan(
        ticket_id=ticket_id,
        scanned_by=context["scanned_by"],
        scanned_at=utcnow(),
        scanned_code=context["code"][:SCANNED_CODE_MAX_LENGTH],
        scan_location=context["location"],
        device_info=context["device_info"],
        scan_result=result,
    )
    db.add(row)
    db.commit()
    return row


def _reject(
    db: Session, ticket: Ticket | None, result: ScanResultEnum, context: dict
) -> ScanOutcome:
    row = _record(db, ticket.id if ticket else None, result, context)
    logger.info(
        "Scan code=%s result=%s scanned_by=%s",
        context["code"],
        result.value,
        context["scanned_by"],
    )
    return ScanOutcome(result=result, ticket=ticket, scan=row)


def _redeemed(
    db: Session, ticket: Ticket, ticket_id: int, context: dict
) -> ScanOutcome:
    # The redemption is committed; a failed audit insert must not undo it.
    try:
        row = _record(db, ticket_id, ScanResultEnum.SUCCESS, context)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Ticket ticket_id=%s redeemed but its scan record was not written",
            ticket_id,
        )
        return ScanOutcome(
            result=ScanResultEnum.SUCCESS,
            ticket=ticket,
            scan=None,
            audit_recorded=False,
        )
    logger.info(
        "Scan code=%s result=success ticket_id=%s scanned_by=%s",
        context["code"],
        ticket_id,
        context["scanned_by"],
    )
    return ScanOutcome(result=ScanResultEnum.SUCCESS, ticket=ticket, scan=row)
