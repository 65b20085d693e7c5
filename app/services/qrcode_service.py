"""
QR Code Service
Data-URL encoded PNG QR codes for verification links
"""

import base64
import io

import qrcode

# /api/qrcode renders at 300px; the verification card embeds a smaller code
QR_SIZE = 300
VERIFY_QR_SIZE = 200


def create_qr_data_url(data: str, size: int = QR_SIZE, border: int = 2) -> str:
    """
    Generate a black-on-white QR code and return it as a base64 data URI

    Raises:
        ValueError: data does not fit in the largest QR version
    """
    qr = qrcode.QRCode(box_size=10, border=border)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").convert("RGB")
    img = img.resize((size, size))

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    img_base64 = base64.b64encode(buffer.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{img_base64}"
