import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from buspass.database import get_db
from buspass.exceptions import (
    ApplicantNotFoundError, InvalidAmountError, InvalidRecordIdError, MissingFieldsError
)
from buspass.tickets.schemas import TicketBookingRequest
from buspass.tickets.service import TicketService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/bookTicket")
def book_ticket(request: TicketBookingRequest, db: Session = Depends(get_db)):
    """Book a ticket for an applicant"""
    try:
        ticket = TicketService(db).book_ticket(request)
    except (MissingFieldsError, InvalidAmountError) as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "msg": str(e)},
        )
    except InvalidRecordIdError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": str(e)},
        )
    except ApplicantNotFoundError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "msg": "Applicant not found"},
        )
    except Exception as e:
        logger.exception("Ticket booking error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e)},
        )

    return {"success": True, "ticket": ticket.to_dict()}
