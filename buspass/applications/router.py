import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from buspass.config import Settings
from buspass.database import get_db
from buspass.dependencies import get_app_settings
from buspass.exceptions import InvalidRecordIdError
from buspass.applications.schemas import (
    ApplicationForm, ApplicationConfirmation, VerifyResponse, ApplicantResponse
)
from buspass.applications.service import ApplicationService, LookupService

logger = logging.getLogger(__name__)

router = APIRouter()

def application_form(
    name: Optional[str] = Form(None),
    father_name: Optional[str] = Form(None, alias="fatherName"),
    dob: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    age_years: Optional[str] = Form(None, alias="ageYears"),
    age_months: Optional[str] = Form(None, alias="ageMonths"),
    age_days: Optional[str] = Form(None, alias="ageDays"),
    aadhar: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    whatsapp: Optional[str] = Form(None),
    number: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    district: Optional[str] = Form(None),
    mandal: Optional[str] = Form(None),
    village: Optional[str] = Form(None),
    pincode: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    pass_type: Optional[str] = Form(None, alias="passType"),
    counter: Optional[str] = Form(None),
) -> ApplicationForm:
    """Collect the multipart text fields into an ApplicationForm"""
    return ApplicationForm(
        name=name,
        father_name=father_name,
        dob=dob,
        gender=gender,
        age_years=age_years,
        age_months=age_months,
        age_days=age_days,
        aadhar=aadhar,
        phone=phone,
        whatsapp=whatsapp,
        number=number,
        email=email,
        address=address,
        district=district,
        mandal=mandal,
        village=village,
        pincode=pincode,
        city=city,
        pass_type=pass_type,
        counter=counter,
    )

def invalid_id_response(e: InvalidRecordIdError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": str(e)},
    )

@router.post("/apply", response_model=ApplicationConfirmation)
def submit_application(
    form: ApplicationForm = Depends(application_form),
    photo: Optional[UploadFile] = File(None),
    aadhar_file: Optional[UploadFile] = File(None, alias="aadharFile"),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db),
):
    """Submit a bus pass application and receive the pass id and QR code"""
    service = ApplicationService(db, settings)

    try:
        applicant = service.submit_application(form, photo=photo, aadhar_file=aadhar_file)
    except Exception:
        logger.exception("Error inserting application")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Failed to save application"},
        )

    return ApplicationConfirmation(
        id=str(applicant.id),
        pass_id=applicant.pass_id,
        qr_code=applicant.qr_code,
    )

@router.get("/verify/{phone}", response_model=VerifyResponse, response_model_exclude_unset=True)
def verify_by_phone(phone: str, db: Session = Depends(get_db)):
    """Check whether an application exists for a phone, WhatsApp or alternate number"""
    try:
        applicant = LookupService(db).verify_by_phone(phone)
    except Exception:
        logger.exception("Verify error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Server error"},
        )

    if not applicant:
        return VerifyResponse(success=False)
    return VerifyResponse(success=True, id=str(applicant.id))

@router.get("/applicant/{applicant_id}", response_model=ApplicantResponse, response_model_exclude_unset=True)
def get_applicant(applicant_id: str, db: Session = Depends(get_db)):
    """Fetch an applicant by record id"""
    try:
        applicant = LookupService(db).get_by_id(applicant_id)
    except InvalidRecordIdError as e:
        return invalid_id_response(e)
    except Exception:
        logger.exception("Fetch error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Server error"},
        )

    if not applicant:
        return ApplicantResponse(success=False)
    return ApplicantResponse(success=True, applicant=applicant.to_dict())

@router.get("/getApplicant/{pass_id}")
def get_applicant_by_pass_id(pass_id: str, db: Session = Depends(get_db)):
    """Resolve a scanned QR code to the applicant record"""
    try:
        applicant = LookupService(db).get_by_pass_id(pass_id)
    except Exception as e:
        logger.exception("Pass lookup error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e)},
        )

    if not applicant:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "msg": "Not found"},
        )
    return applicant.to_dict()
