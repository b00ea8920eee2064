# telecom_provider/services/support_service.py
"""
Support tickets. closed_at is kept consistent with the status here; the
schema itself accepts any combination.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import Session

from ..core.constants import SupportStatus
from ..core.exceptions import ConstraintViolationError
from ..models import CustomerSupport
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


class SupportService(BaseCRUDService[CustomerSupport]):
    def __init__(self, session: Session):
        super().__init__(session, CustomerSupport)

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        status = data.get("status")
        closed = status in (SupportStatus.CLOSED, SupportStatus.CLOSED.value)
        if data.get("closed_at") is not None and not closed:
            raise ConstraintViolationError(
                "customer_support.closed_at",
                f"closed_at is only allowed on closed tickets (status={status})",
            )
        if closed and data.get("closed_at") is None:
            data["closed_at"] = datetime.now()
        return data

    def open_ticket(self, data: Dict[str, Any]) -> CustomerSupport:
        payload = {"status": SupportStatus.OPEN, **data}
        ticket = self.create(payload)
        logger.info(f"Ticket {ticket.id} opened for customer {ticket.customer_id}")
        return ticket

    def start_progress(self, ticket_id: int) -> CustomerSupport:
        return self.update(ticket_id, {"status": SupportStatus.IN_PROGRESS, "closed_at": None})

    def close_ticket(self, ticket_id: int, closed_at: Optional[datetime] = None) -> CustomerSupport:
        ticket = self.update(
            ticket_id, {"status": SupportStatus.CLOSED, "closed_at": closed_at or datetime.now()}
        )
        logger.info(f"Ticket {ticket_id} closed at {ticket.closed_at}")
        return ticket
