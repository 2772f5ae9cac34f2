"""
Pass Application Module

Submission of bus pass applications and the lookups used by counters and
conductors:

- service.py: ApplicationService (issue pass id + QR, persist) and LookupService
  (by phone alias, record id, or pass id)
- router.py: /apply, /verify/{phone}, /applicant/{id}, /getApplicant/{passId}
- schemas.py: form and response models
"""

from .router import router
from .service import ApplicationService, LookupService, parse_record_id
from .schemas import ApplicationForm, ApplicationConfirmation, PAYMENT_MODE, DELIVERY_MODE

__all__ = [
    "router",
    "ApplicationService",
    "LookupService",
    "parse_record_id",
    "ApplicationForm",
    "ApplicationConfirmation",
    "PAYMENT_MODE",
    "DELIVERY_MODE",
]
