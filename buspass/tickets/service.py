import logging
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from buspass.applications.service import parse_record_id
from buspass.exceptions import ApplicantNotFoundError, InvalidAmountError, MissingFieldsError
from buspass.models import Applicant, Ticket
from buspass.tickets.schemas import PaymentType, TicketBookingRequest, REQUIRED_BOOKING_FIELDS

logger = logging.getLogger(__name__)

def resolve_amount(payment_type: str, amount) -> Decimal:
    """Amount to record: the numeric input for PAID bookings, zero otherwise"""
    if payment_type != PaymentType.PAID.value:
        return Decimal("0")

    # Absent or blank amounts are recorded as zero
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return Decimal("0")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise InvalidAmountError(f"amount must be numeric, got {amount!r}")
    if not value.is_finite():
        raise InvalidAmountError(f"amount must be numeric, got {amount!r}")
    return value

class TicketService:
    """Books tickets against existing applicants"""

    def __init__(self, db: Session):
        self.db = db

    def book_ticket(self, request: TicketBookingRequest) -> Ticket:
        missing = [
            name for name, attr in REQUIRED_BOOKING_FIELDS.items()
            if not getattr(request, attr)
        ]
        if missing:
            raise MissingFieldsError(missing)

        applicant_id = parse_record_id(request.applicant_id)
        amount = resolve_amount(request.payment_type, request.amount)

        if self.db.get(Applicant, applicant_id) is None:
            raise ApplicantNotFoundError(f"Applicant {applicant_id} not found")

        ticket = Ticket(
            applicant_id=applicant_id,
            source=request.source,
            destination=request.destination,
            payment_type=request.payment_type,
            amount=amount,
        )
        self.db.add(ticket)
        self.db.commit()
        self.db.refresh(ticket)

        logger.info(
            "Ticket booked: id=%s applicant=%s %s -> %s (%s %s)",
            ticket.id, applicant_id, ticket.source, ticket.destination, ticket.payment_type, ticket.amount,
        )
        return ticket
