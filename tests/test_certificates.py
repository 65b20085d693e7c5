import uuid

from app.services.email_service import EmailService


ADA = {"name": "Ada Lovelace", "email": "ada@example.com"}


def test_generate_single_certificate(issue, event):
    data = issue([ADA])
    assert data["success"] is True
    assert data["count"] == 1

    cert = data["certificates"][0]
    assert cert["participant_name"] == "Ada Lovelace"
    assert cert["participant_email"] == "ada@example.com"
    assert cert["event_id"] == event["id"]
    assert cert["downloaded"] is False
    assert str(uuid.UUID(cert["certificate_uuid"])) == cert["certificate_uuid"]
    assert "Ada%20Lovelace" in cert["cloudinary_url"]
    assert "x_400,y_250" in cert["cloudinary_url"]
    assert cert["download_url"] == cert["cloudinary_url"].replace("/upload/", "/upload/fl_attachment/")
    assert cert["verification_url"] == f"https://certs.example.com/verify/{cert['certificate_uuid']}"


def test_generate_batch_has_distinct_public_ids(client, issue, event):
    participants = [{"name": f"Participant {i}", "email": f"p{i}@example.com"} for i in range(25)]
    data = issue(participants)

    assert data["count"] == 25
    assert len({c["certificate_uuid"] for c in data["certificates"]}) == 25

    stored = client.get("/api/certificates", params={"eventId": event["id"]}).json()["certificates"]
    assert len(stored) == 25


def test_resubmitting_creates_duplicates(client, issue):
    first = issue([ADA])["certificates"][0]
    second = issue([ADA])["certificates"][0]

    assert first["certificate_uuid"] != second["certificate_uuid"]
    # Same name and template render the same image
    assert first["cloudinary_url"] == second["cloudinary_url"]

    found = client.get("/api/certificates", params={"email": "ada@example.com"}).json()
    assert len(found["certificates"]) == 2


def test_unknown_event_creates_nothing(client, event):
    resp = client.post(
        "/api/certificates",
        json={"eventId": str(uuid.uuid4()), "participants": [ADA]},
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Event not found"
    assert client.get("/api/certificates").json()["certificates"] == []


def test_empty_participant_list(issue):
    data = issue([])
    assert data["count"] == 0
    assert data["certificates"] == []


def test_search_by_email(client, issue):
    issue([ADA, {"name": "Grace Hopper", "email": "grace@example.com"}])

    found = client.get("/api/certificates", params={"email": "ada@example.com"}).json()["certificates"]
    assert len(found) == 1
    assert found[0]["participant_name"] == "Ada Lovelace"
    assert found[0]["event_name"] == "Hackathon 2024"


def test_search_email_is_exact_match(client, issue):
    issue([ADA])
    assert client.get("/api/certificates", params={"email": "ADA@example.com"}).json()["certificates"] == []
    assert client.get("/api/certificates", params={"email": " ada@example.com"}).json()["certificates"] == []


def test_search_newest_first(client, issue):
    issue([{"name": "First", "email": "same@example.com"}])
    issue([{"name": "Second", "email": "same@example.com"}])

    found = client.get("/api/certificates", params={"email": "same@example.com"}).json()["certificates"]
    assert [c["participant_name"] for c in found] == ["Second", "First"]


def test_search_filters_by_event(client, issue, hackathon_payload):
    issue([ADA])
    hackathon_payload["name"] = "Other"
    other = client.post("/api/events", json=hackathon_payload).json()["event"]
    client.post("/api/certificates", json={"eventId": other["id"], "participants": [ADA]})

    found = client.get(
        "/api/certificates", params={"email": "ada@example.com", "eventId": other["id"]}
    ).json()["certificates"]
    assert len(found) == 1
    assert found[0]["event_name"] == "Other"


def test_download_tracking_is_idempotent(client, issue):
    cert = issue([ADA])["certificates"][0]

    for _ in range(3):
        resp = client.post("/api/certificates/download", json={"certificateId": cert["id"]})
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

    found = client.get("/api/certificates", params={"email": "ada@example.com"}).json()["certificates"]
    assert found[0]["downloaded"] is True


def test_download_tracking_requires_id(client):
    resp = client.post("/api/certificates/download", json={})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Certificate ID is required"


def test_generate_with_emails(client, issue, monkeypatch):
    sent = []

    async def fake_send(to, participant_name, event_name, certificate_url, verification_url, custom_message=None):
        sent.append((to, event_name, certificate_url, custom_message))
        return f"msg-{to}"

    monkeypatch.setattr(EmailService, "send_certificate_email", fake_send)

    data = issue([ADA, {"name": "Grace Hopper", "email": "grace@example.com"}],
                 sendEmails=True, customMessage="Well done!")

    assert data["emails"] == {"sent": 2, "failed": 0}
    assert data["message"] == "Emails sent to 2 participants!"
    assert {s[0] for s in sent} == {"ada@example.com", "grace@example.com"}
    assert all(s[1] == "Hackathon 2024" for s in sent)
    assert all("/upload/fl_attachment/" in s[2] for s in sent)
    assert all(s[3] == "Well done!" for s in sent)

    deliveries = client.get("/api/email-deliveries", params={"status": "sent"}).json()
    assert deliveries["total"] == 2


def test_email_failures_do_not_undo_issuance(client, issue, monkeypatch):
    from fastapi import HTTPException

    async def flaky_send(to, participant_name, event_name, certificate_url, verification_url, custom_message=None):
        if to == "grace@example.com":
            raise HTTPException(status_code=500, detail="Email provider error: rejected")
        return "msg-ok"

    monkeypatch.setattr(EmailService, "send_certificate_email", flaky_send)

    data = issue([ADA, {"name": "Grace Hopper", "email": "grace@example.com"}], sendEmails=True)

    assert data["count"] == 2
    assert data["emails"] == {"sent": 1, "failed": 1}
    assert data["message"] == "Certificates generated but some emails failed to send."
    assert len(client.get("/api/certificates").json()["certificates"]) == 2

    failed = client.get("/api/email-deliveries", params={"status": "failed"}).json()["deliveries"]
    assert len(failed) == 1
    assert failed[0]["recipient"] == "grace@example.com"
    assert failed[0]["attempts"] == 1
    assert failed[0]["last_error"] == "Email provider error: rejected"


def test_retry_failed_deliveries(client, issue, monkeypatch):
    async def failing_send(**kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(EmailService, "send_certificate_email", failing_send)
    issue([ADA], sendEmails=True)

    async def working_send(**kwargs):
        return "msg-retried"

    monkeypatch.setattr(EmailService, "send_certificate_email", working_send)
    resp = client.post("/api/email-deliveries/retry")
    assert resp.json() == {"attempted": 1, "sent": 1, "failed": 0}

    delivery = client.get("/api/email-deliveries").json()["deliveries"][0]
    assert delivery["status"] == "sent"
    assert delivery["attempts"] == 2
    assert delivery["message_id"] == "msg-retried"


def test_upload_csv(client, event):
    csv_content = (
        "Name,Email\n"
        "Ada Lovelace,ada@example.com\n"
        ",missing@example.com\n"
        "Grace Hopper,grace@example.com\n"
    )
    resp = client.post(
        "/api/certificates/upload",
        data={"event_id": event["id"]},
        files={"file": ("participants.csv", csv_content.encode(), "text/csv")},
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["count"] == 2
    assert data["skipped"] == [{"row": 3, "error": "name is empty"}]
    assert "emails" not in data or data["emails"] is None


def test_upload_csv_missing_columns(client, event):
    resp = client.post(
        "/api/certificates/upload",
        data={"event_id": event["id"]},
        files={"file": ("participants.csv", b"name\nAda\n", "text/csv")},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Missing required columns: email"


def test_analytics(client, issue, hackathon_payload):
    certs = issue([ADA, {"name": "Grace Hopper", "email": "grace@example.com"}])["certificates"]
    hackathon_payload["name"] = "Empty Event"
    client.post("/api/events", json=hackathon_payload)
    client.post("/api/certificates/download", json={"certificateId": certs[0]["id"]})

    stats = client.get("/api/analytics").json()
    assert stats["totalEvents"] == 2
    assert stats["totalCertificates"] == 2
    assert stats["downloaded"] == 1
    assert stats["pending"] == 1
    assert stats["downloadRate"] == 50.0
    assert {s["name"]: s["certificates"] for s in stats["eventStats"]} == {
        "Hackathon 2024": 2,
        "Empty Event": 0,
    }


def test_failed_batch_inserts_nothing(client, event, monkeypatch):
    from types import SimpleNamespace

    from app.services import certificate_service

    # Second participant reuses the first participant's public id
    ids = iter([uuid.uuid4() for _ in range(3)])
    first_id, shared_public_id, second_id = next(ids), next(ids), next(ids)
    sequence = iter([first_id, shared_public_id, second_id, shared_public_id])
    monkeypatch.setattr(certificate_service, "uuid", SimpleNamespace(uuid4=lambda: next(sequence)))

    resp = client.post(
        "/api/certificates",
        json={"eventId": event["id"], "participants": [ADA, {"name": "Grace Hopper", "email": "grace@example.com"}]},
    )
    assert resp.status_code == 500
    assert client.get("/api/certificates").json()["certificates"] == []


def test_outbox_write_failure_still_returns_certificates(client, issue, monkeypatch):
    from app.services.notification_service import NotificationService

    original_enqueue = NotificationService._enqueue

    async def flaky_enqueue(certificate, event_name, custom_message):
        if certificate["participant_email"] == "grace@example.com":
            raise RuntimeError("email_deliveries insert failed")
        return await original_enqueue(certificate, event_name, custom_message)

    async def fake_send(**kwargs):
        return "msg-ok"

    monkeypatch.setattr(NotificationService, "_enqueue", flaky_enqueue)
    monkeypatch.setattr(EmailService, "send_certificate_email", fake_send)

    data = issue([ADA, {"name": "Grace Hopper", "email": "grace@example.com"}], sendEmails=True)

    assert data["count"] == 2
    assert len(data["certificates"]) == 2
    assert data["emails"] == {"sent": 1, "failed": 1}
    assert data["message"] == "Certificates generated but some emails failed to send."
    assert len(client.get("/api/certificates").json()["certificates"]) == 2
