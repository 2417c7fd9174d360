from __future__ import annotations

import io


def request_form(**overrides):
    """Build a valid submission form for POST /api/requests."""
    form = {
        "name": "Asha Rao",
        "email": "asha.rao@example.com",
        "empId": "EMP001",
        "program": "Gym Membership",
        "program_time": "Morning",
        "date": "2025-03-10",
        "reason": "Fitness",
    }
    form.update(overrides)
    return {key: value for key, value in form.items() if value is not None}


def pdf_upload(name="report.pdf", content=b"%PDF-1.4 test document", mimetype="application/pdf"):
    return (io.BytesIO(content), name, mimetype)


def submit(client, document=None, **overrides):
    data = request_form(**overrides)
    if document is not None:
        data["document"] = document
    return client.post("/api/requests", data=data, content_type="multipart/form-data")
