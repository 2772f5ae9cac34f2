import base64
from io import BytesIO

import qrcode
from qrcode import constants

QR_BOX_SIZE = 4
QR_BORDER = 4

def qr_payload(pass_id: str) -> str:
    """Text embedded in the QR symbol; scanning it yields the pass id unchanged"""
    return pass_id

def build_qr(pass_id: str) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=None,
        error_correction=constants.ERROR_CORRECT_M,
        box_size=QR_BOX_SIZE,
        border=QR_BORDER,
    )
    qr.add_data(qr_payload(pass_id))
    qr.make(fit=True)
    return qr

def make_qr_image(pass_id: str):
    return build_qr(pass_id).make_image(fill_color="black", back_color="white")

def encode_qr_data_url(pass_id: str) -> str:
    """Render the pass id as a PNG QR code and return it as a base64 data URL"""
    buffer = BytesIO()
    make_qr_image(pass_id).save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
