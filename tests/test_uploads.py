import re

from recruitment.core.config import settings

PDF = ("cv.pdf", b"%PDF-1.4 fake resume", "application/pdf")


def upload(client, headers, file=PDF, file_type="cv"):
    return client.post("/api/upload", files={"file": file}, data={"fileType": file_type}, headers=headers)


def test_upload_pdf(client, candidate, candidate_headers, storage):
    response = upload(client, candidate_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert re.fullmatch(rf"candidates/{candidate.user_id}/cv-\d+\.pdf", body["fileName"])
    assert body["fileUrl"].endswith(body["fileName"])
    assert body["fileId"] in storage.files
    assert storage.files[body["fileId"]]["contentType"] == "application/pdf"


def test_upload_defaults_file_type(client, candidate, candidate_headers):
    response = client.post(
        "/api/upload",
        files={"file": ("photo.png", b"\x89PNG fake", "image/png")},
        headers=candidate_headers,
    )
    assert response.status_code == 200
    assert re.fullmatch(rf"candidates/{candidate.user_id}/document-\d+\.png", response.json()["fileName"])


def test_zip_rejected_before_storage(client, candidate_headers, storage):
    response = upload(client, candidate_headers, file=("archive.zip", b"PK\x03\x04", "application/zip"))
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file type. Only PDF, DOC, DOCX, JPG, and PNG are allowed."}
    assert storage.calls == 0


def test_oversized_file_rejected(client, candidate_headers, storage, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_MAX_BYTES", 10)
    response = upload(client, candidate_headers, file=("cv.pdf", b"x" * 11, "application/pdf"))
    assert response.status_code == 400
    assert "File too large" in response.json()["error"]
    assert storage.calls == 0


def test_invalid_file_type_label(client, candidate_headers, storage):
    response = upload(client, candidate_headers, file_type="../etc")
    assert response.status_code == 400
    assert storage.calls == 0


def test_storage_failure(client, candidate_headers, storage):
    storage.fail_with = "upload failed with status 503"
    response = upload(client, candidate_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to upload file", "message": "upload failed with status 503"}


def test_upload_requires_candidate(client, company_headers, storage):
    assert upload(client, company_headers).status_code == 403
    assert client.post("/api/upload", files={"file": PDF}).status_code == 401
    assert storage.calls == 0


def test_file_info_scoped_to_owner(client, create_candidate, candidate_headers, headers_for):
    file_id = upload(client, candidate_headers).json()["fileId"]

    own = client.get(f"/api/upload/{file_id}", headers=candidate_headers)
    assert own.status_code == 200
    assert own.json()["fileId"] == file_id

    other = create_candidate(email="bob@example.com", first_name="Bob", last_name="Stone")
    assert client.get(f"/api/upload/{file_id}", headers=headers_for(other.user)).status_code == 404


def test_delete_file(client, create_candidate, candidate_headers, headers_for, storage):
    uploaded = upload(client, candidate_headers).json()

    other = create_candidate(email="bob@example.com", first_name="Bob", last_name="Stone")
    denied = client.delete(
        f"/api/upload/{uploaded['fileId']}",
        params={"fileName": uploaded["fileName"]},
        headers=headers_for(other.user),
    )
    assert denied.status_code == 403
    assert storage.deleted == []

    response = client.delete(
        f"/api/upload/{uploaded['fileId']}",
        params={"fileName": uploaded["fileName"]},
        headers=candidate_headers,
    )
    assert response.status_code == 200
    assert storage.deleted == [(uploaded["fileName"], uploaded["fileId"])]
