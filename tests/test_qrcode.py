import base64
import io

from PIL import Image

from app.services.qrcode_service import create_qr_data_url


def test_qr_code_is_png_of_requested_size():
    data_url = create_qr_data_url("https://certs.example.com/verify/abc", size=300)
    prefix = "data:image/png;base64,"
    assert data_url.startswith(prefix)

    image = Image.open(io.BytesIO(base64.b64decode(data_url[len(prefix):])))
    assert image.format == "PNG"
    assert image.size == (300, 300)


def test_qr_code_is_regenerated_identically():
    url = "https://certs.example.com/verify/abc"
    assert create_qr_data_url(url) == create_qr_data_url(url)
