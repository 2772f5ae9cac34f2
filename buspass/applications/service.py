import logging
import uuid
from typing import Callable, Optional

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from buspass.config import Settings, get_settings
from buspass.exceptions import InvalidRecordIdError, PassIdExhaustedError
from buspass.models import Applicant, ApplicantContact
from buspass.passes import generate_pass_id, encode_qr_data_url, save_upload
from buspass.applications.schemas import ApplicationForm, PAYMENT_MODE, DELIVERY_MODE

logger = logging.getLogger(__name__)

def parse_record_id(record_id: str) -> uuid.UUID:
    """Parse a store record id, raising InvalidRecordIdError for malformed input"""
    try:
        return uuid.UUID(str(record_id))
    except (TypeError, ValueError):
        raise InvalidRecordIdError(f"Invalid id format: {record_id}")

class ApplicationService:
    """Accepts pass applications and issues pass identifiers with QR codes"""

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        pass_id_factory: Callable[[str], str] = generate_pass_id,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.pass_id_factory = pass_id_factory

    def submit_application(
        self,
        form: ApplicationForm,
        photo: Optional[UploadFile] = None,
        aadhar_file: Optional[UploadFile] = None,
    ) -> Applicant:
        """Store uploads, issue a unique pass id and persist the applicant.

        A pass id that collides with an existing one is regenerated, up to
        ``PASS_ID_MAX_ATTEMPTS`` times.
        """
        upload_dir = self.settings.UPLOAD_DIR
        url_prefix = self.settings.UPLOAD_URL_PREFIX
        # Files land on disk before the insert and are not removed if it fails
        photo_path = save_upload(photo, upload_dir, url_prefix)
        aadhar_path = save_upload(aadhar_file, upload_dir, url_prefix)

        aliases = form.contact_aliases()
        max_attempts = max(1, self.settings.PASS_ID_MAX_ATTEMPTS)

        for attempt in range(1, max_attempts + 1):
            pass_id = self.pass_id_factory(self.settings.PASS_ID_PREFIX)
            applicant = self._build_applicant(form, aliases, pass_id, photo_path, aadhar_path)
            self.db.add(applicant)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                logger.warning("Pass id %s already issued (attempt %d/%d)", pass_id, attempt, max_attempts)
                continue

            self.db.refresh(applicant)
            logger.info("Application stored: id=%s passId=%s", applicant.id, applicant.pass_id)
            return applicant

        logger.error("Could not issue a unique pass id after %d attempts", max_attempts)
        raise PassIdExhaustedError(f"No unique pass id after {max_attempts} attempts")

    def _build_applicant(self, form, aliases, pass_id, photo_path, aadhar_path) -> Applicant:
        return Applicant(
            pass_id=pass_id,
            qr_code=encode_qr_data_url(pass_id),
            name=form.name,
            father_name=form.father_name,
            dob=form.dob,
            gender=form.gender,
            age_years=form.age_years,
            age_months=form.age_months,
            age_days=form.age_days,
            aadhar=form.aadhar,
            phone=aliases["phone"],
            email=form.email,
            photo=photo_path,
            aadhar_file=aadhar_path,
            address=form.address,
            district=form.district,
            mandal=form.mandal,
            village=form.village,
            pincode=form.pincode,
            city=form.city,
            pass_type=form.pass_type,
            payment_mode=PAYMENT_MODE,
            delivery_mode=DELIVERY_MODE,
            counter=form.counter,
            contacts=[
                ApplicantContact(kind=kind, value=value)
                for kind, value in aliases.items()
                if value
            ],
        )

class LookupService:
    """Read-only resolution of applicants; a missing record is returned as None"""

    def __init__(self, db: Session):
        self.db = db

    def verify_by_phone(self, phone: str) -> Optional[Applicant]:
        """Find the first applicant whose phone, whatsapp or number equals ``phone``"""
        return (
            self.db.query(Applicant)
            .join(Applicant.contacts)
            .filter(ApplicantContact.value == phone)
            .first()
        )

    def get_by_id(self, applicant_id: str) -> Optional[Applicant]:
        return self.db.get(Applicant, parse_record_id(applicant_id))

    def get_by_pass_id(self, pass_id: str) -> Optional[Applicant]:
        """Resolve a scanned QR code"""
        return self.db.query(Applicant).filter(Applicant.pass_id == pass_id).first()
