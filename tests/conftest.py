import os
import pathlib
import sys
import tempfile

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_DB_DIR = tempfile.mkdtemp(prefix="certificate-pro-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["APP_URL"] = "https://certs.example.com"
os.environ["CLOUDINARY_CLOUD_NAME"] = "demo-cloud"
os.environ["CLOUDINARY_API_KEY"] = ""
os.environ["CLOUDINARY_API_SECRET"] = ""
os.environ["ADMIN_API_KEY"] = ""
os.environ["EMAIL_PROVIDER"] = "resend"
os.environ["RESEND_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient  # noqa: E402

from app.database import engine, metadata  # noqa: E402
import app.models  # noqa: E402,F401
from app.main import app as fastapi_app  # noqa: E402


@pytest.fixture
def client():
    metadata.drop_all(engine)
    metadata.create_all(engine)
    with TestClient(fastapi_app) as test_client:
        yield test_client


@pytest.fixture
def hackathon_payload():
    return {
        "name": "Hackathon 2024",
        "templateUrl": "certificate-templates/hackathon",
        "textX": 400,
        "textY": 250,
        "fontSize": 50,
        "fontFamily": "Roboto",
        "fontColor": "000000",
    }


@pytest.fixture
def event(client, hackathon_payload):
    resp = client.post("/api/events", json=hackathon_payload)
    assert resp.status_code == 200
    return resp.json()["event"]


@pytest.fixture
def issue(client, event):
    def _issue(participants, **extra):
        resp = client.post(
            "/api/certificates",
            json={"eventId": event["id"], "participants": participants, **extra},
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _issue
