"""
Pass Issuance Module

Building blocks shared by the application workflow:

- identifiers.py: human-readable pass identifiers (PREFIX-########)
- qr.py: QR code payloads that resolve back to a pass identifier
- uploads.py: storage of applicant photo and Aadhar scans under the upload directory
"""

from .identifiers import generate_pass_id, PASS_ID_MIN, PASS_ID_MAX
from .qr import encode_qr_data_url, qr_payload
from .uploads import save_upload

__all__ = [
    "generate_pass_id",
    "PASS_ID_MIN",
    "PASS_ID_MAX",
    "encode_qr_data_url",
    "qr_payload",
    "save_upload",
]
