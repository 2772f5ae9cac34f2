from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

PAYMENT_MODE = "FREE SCHEME"
DELIVERY_MODE = "Bus Pass Counter"

class ApplicationForm(BaseModel):
    """Text fields of a pass application as submitted by the form"""
    name: Optional[str] = None
    father_name: Optional[str] = Field(None, alias="fatherName")
    dob: Optional[str] = None
    gender: Optional[str] = None
    age_years: Optional[str] = Field(None, alias="ageYears")
    age_months: Optional[str] = Field(None, alias="ageMonths")
    age_days: Optional[str] = Field(None, alias="ageDays")
    aadhar: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    district: Optional[str] = None
    mandal: Optional[str] = None
    village: Optional[str] = None
    pincode: Optional[str] = None
    city: Optional[str] = None
    pass_type: Optional[str] = Field(None, alias="passType")
    counter: Optional[str] = None

    class Config:
        populate_by_name = True

    def contact_aliases(self) -> Dict[str, Optional[str]]:
        """Resolve phone/whatsapp/number, each falling back to the canonical phone.

        The canonical value prefers ``phone``, then ``whatsapp``, then ``number``;
        blank strings count as absent.
        """
        canonical = self.phone or self.whatsapp or self.number or None
        return {
            "phone": canonical,
            "whatsapp": self.whatsapp or canonical,
            "number": self.number or canonical,
        }

class ApplicationConfirmation(BaseModel):
    success: bool = True
    message: str = "Application stored"
    id: str
    pass_id: str = Field(..., alias="passId")
    qr_code: str = Field(..., alias="qrCode")

    class Config:
        populate_by_name = True

class VerifyResponse(BaseModel):
    success: bool
    id: Optional[str] = None

class ApplicantResponse(BaseModel):
    success: bool
    applicant: Optional[Dict[str, Any]] = None
