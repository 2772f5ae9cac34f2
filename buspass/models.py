import uuid

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Numeric, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from buspass.database import Base

# ================================
# Applicants
# ================================
class Applicant(Base):
    __tablename__ = "applicants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    pass_id = Column(String(32), unique=True, nullable=False, index=True)
    qr_code = Column(Text, nullable=False)

    # Identity
    name = Column(String(255))
    father_name = Column(String(255))
    dob = Column(String(32))
    gender = Column(String(32))
    age_years = Column(String(8))
    age_months = Column(String(8))
    age_days = Column(String(8))

    # Contact / documents
    phone = Column(String(32), index=True)
    email = Column(String(255))
    aadhar = Column(String(32))
    photo = Column(String(512), nullable=False, default="")
    aadhar_file = Column(String(512), nullable=False, default="")

    # Address
    address = Column(Text)
    district = Column(String(255))
    mandal = Column(String(255))
    village = Column(String(255))
    pincode = Column(String(16))
    city = Column(String(255))

    # Pass
    pass_type = Column(String(100))
    payment_mode = Column(String(50), nullable=False)
    delivery_mode = Column(String(100), nullable=False)
    counter = Column(String(100))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    contacts = relationship("ApplicantContact", back_populates="applicant", cascade="all, delete-orphan")
    tickets = relationship("Ticket", back_populates="applicant")

    def contact(self, kind: str):
        for contact in self.contacts:
            if contact.kind == kind:
                return contact.value
        return None

    def to_dict(self):
        return {
            "_id": str(self.id),
            "passId": self.pass_id,
            "qrCode": self.qr_code,
            "name": self.name,
            "fatherName": self.father_name,
            "dob": self.dob,
            "gender": self.gender,
            "age": {
                "years": self.age_years,
                "months": self.age_months,
                "days": self.age_days,
            },
            "aadhar": self.aadhar,
            "phone": self.contact("phone") or self.phone,
            "whatsapp": self.contact("whatsapp"),
            "number": self.contact("number"),
            "email": self.email,
            "photo": self.photo,
            "aadharFile": self.aadhar_file,
            "address": self.address,
            "district": self.district,
            "mandal": self.mandal,
            "village": self.village,
            "pincode": self.pincode,
            "city": self.city,
            "passType": self.pass_type,
            "paymentMode": self.payment_mode,
            "deliveryMode": self.delivery_mode,
            "counter": self.counter,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

class ApplicantContact(Base):
    """One lookup alias (phone, whatsapp or number) of an applicant"""
    __tablename__ = "applicant_contacts"
    __table_args__ = (UniqueConstraint("applicant_id", "kind", name="uq_applicant_contact_kind"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    applicant_id = Column(Uuid, ForeignKey("applicants.id", ondelete="CASCADE"), nullable=False)
    kind = Column(String(20), nullable=False)
    value = Column(String(32), nullable=False, index=True)

    # Relationships
    applicant = relationship("Applicant", back_populates="contacts")

# ================================
# Tickets
# ================================
class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    applicant_id = Column(Uuid, ForeignKey("applicants.id"), nullable=False, index=True)
    source = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    payment_type = Column(String(20), nullable=False)
    amount = Column(Numeric, nullable=False, default=0)
    booked_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    applicant = relationship("Applicant", back_populates="tickets")

    def to_dict(self):
        return {
            "_id": str(self.id),
            "applicantId": str(self.applicant_id),
            "source": self.source,
            "destination": self.destination,
            "paymentType": self.payment_type,
            "amount": float(self.amount) if self.amount is not None else 0.0,
            "bookedAt": self.booked_at.isoformat() if self.booked_at else None,
        }
