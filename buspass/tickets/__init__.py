"""
Ticket Booking Module

- service.py: TicketService books a journey against an existing applicant
- router.py: POST /bookTicket
- schemas.py: booking request and PaymentType
"""

from .router import router
from .service import TicketService, resolve_amount
from .schemas import TicketBookingRequest, PaymentType

__all__ = [
    "router",
    "TicketService",
    "resolve_amount",
    "TicketBookingRequest",
    "PaymentType",
]
