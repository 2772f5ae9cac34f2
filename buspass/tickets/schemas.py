from pydantic import BaseModel, Field
from typing import Optional, Union
from enum import Enum

class PaymentType(str, Enum):
    """Ticket payment type"""
    PAID = "PAID"
    FREE = "FREE"

class TicketBookingRequest(BaseModel):
    """Booking body; required fields are checked by the service so a missing
    field is reported as a booking error rather than a schema error"""
    applicant_id: Optional[str] = Field(None, alias="applicantId")
    source: Optional[str] = None
    destination: Optional[str] = None
    payment_type: Optional[str] = Field(None, alias="paymentType")
    amount: Optional[Union[float, str]] = None

    class Config:
        populate_by_name = True

REQUIRED_BOOKING_FIELDS = {
    "applicantId": "applicant_id",
    "source": "source",
    "destination": "destination",
    "paymentType": "payment_type",
}
