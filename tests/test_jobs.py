from datetime import datetime, timedelta

import pytest


def future(days=30):
    return (datetime.utcnow() + timedelta(days=days)).strftime("%Y-%m-%dT%H:%M:%SZ")


@pytest.fixture
def job_payload():
    return {
        "title": "Backend Engineer",
        "description": "Build the platform.",
        "deadline": future(),
        "extraQuestions": [
            {"id": "q1", "question": "Why us?", "type": "textarea", "required": True},
            {"id": "q2", "question": "Preferred stack", "type": "select", "options": ["Python", "Go"]},
        ],
    }


def test_create_job(client, company, company_headers, job_payload):
    response = client.post("/api/jobs", json=job_payload, headers=company_headers)
    assert response.status_code == 201
    job = response.json()
    assert job["title"] == "Backend Engineer"
    assert job["companyId"] == company.id
    assert job["deadline"] is not None
    assert [q["id"] for q in job["extraQuestions"]] == ["q1", "q2"]
    assert job["extraQuestions"][0]["required"] is True


def test_create_job_without_deadline(client, company_headers):
    response = client.post("/api/jobs", json={"title": "Designer", "description": "Draw."}, headers=company_headers)
    assert response.status_code == 201
    assert response.json()["deadline"] is None
    assert response.json()["extraQuestions"] is None


def test_create_job_with_past_deadline(client, company_headers):
    yesterday = (datetime.utcnow() - timedelta(days=1)).strftime("%Y-%m-%d")
    response = client.post(
        "/api/jobs",
        json={"title": "Designer", "description": "Draw.", "deadline": yesterday},
        headers=company_headers,
    )
    assert response.status_code == 400
    assert "Deadline must be in the future" in str(response.json()["errors"])


def test_create_job_missing_title(client, company_headers):
    response = client.post("/api/jobs", json={"title": "   ", "description": "Draw."}, headers=company_headers)
    assert response.status_code == 400


def test_select_question_needs_options(client, company_headers):
    response = client.post("/api/jobs", json={
        "title": "Designer",
        "description": "Draw.",
        "extraQuestions": [{"id": "q1", "question": "Pick one", "type": "radio"}],
    }, headers=company_headers)
    assert response.status_code == 400


def test_duplicate_question_ids_rejected(client, company_headers):
    response = client.post("/api/jobs", json={
        "title": "Designer",
        "description": "Draw.",
        "extraQuestions": [
            {"id": "q1", "question": "One"},
            {"id": "q1", "question": "Two"},
        ],
    }, headers=company_headers)
    assert response.status_code == 400


def test_create_job_requires_company_role(client, candidate_headers, job_payload):
    response = client.post("/api/jobs", json=job_payload, headers=candidate_headers)
    assert response.status_code == 403


def test_my_jobs_lists_only_own_jobs(client, create_company, company_headers, headers_for, job_payload):
    other = create_company(email="other@example.com", name="Other")
    client.post("/api/jobs", json=job_payload, headers=company_headers)
    client.post("/api/jobs", json={"title": "Second", "description": "More."}, headers=company_headers)
    client.post("/api/jobs", json={"title": "Theirs", "description": "Not ours."}, headers=headers_for(other.user))

    response = client.get("/api/jobs/my-jobs", headers=company_headers)
    assert response.status_code == 200
    jobs = response.json()
    assert [j["title"] for j in jobs] == ["Second", "Backend Engineer"]
    assert all(j["applicationsCount"] == 0 for j in jobs)


def test_get_job_of_other_company_is_404(client, create_company, company_headers, headers_for, job_payload):
    other = create_company(email="other@example.com", name="Other")
    job_id = client.post("/api/jobs", json=job_payload, headers=company_headers).json()["id"]

    assert client.get(f"/api/jobs/{job_id}", headers=company_headers).status_code == 200
    response = client.get(f"/api/jobs/{job_id}", headers=headers_for(other.user))
    assert response.status_code == 404
    assert response.json() == {"error": "Job not found"}


def test_public_job_needs_no_token(client, company_headers, job_payload):
    job_id = client.post("/api/jobs", json=job_payload, headers=company_headers).json()["id"]

    response = client.get(f"/api/jobs/public/{job_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Backend Engineer"
    assert body["company"]["companyName"] == "Acme"
    assert "companyId" not in body


def test_public_job_not_found(client):
    assert client.get("/api/jobs/public/999").status_code == 404


def test_update_job_partially(client, company_headers, job_payload):
    job_id = client.post("/api/jobs", json=job_payload, headers=company_headers).json()["id"]

    response = client.put(f"/api/jobs/{job_id}", json={"title": "Senior Backend Engineer"}, headers=company_headers)
    assert response.status_code == 200
    job = response.json()
    assert job["title"] == "Senior Backend Engineer"
    assert job["description"] == "Build the platform."
    assert len(job["extraQuestions"]) == 2


def test_update_job_can_clear_deadline(client, company_headers, job_payload):
    job_id = client.post("/api/jobs", json=job_payload, headers=company_headers).json()["id"]

    response = client.put(f"/api/jobs/{job_id}", json={"deadline": None}, headers=company_headers)
    assert response.status_code == 200
    assert response.json()["deadline"] is None


def test_update_job_rejects_null_title(client, company_headers, job_payload):
    job_id = client.post("/api/jobs", json=job_payload, headers=company_headers).json()["id"]
    response = client.put(f"/api/jobs/{job_id}", json={"title": None}, headers=company_headers)
    assert response.status_code == 400


def test_update_other_company_job_is_404(client, create_company, company_headers, headers_for, job_payload):
    other = create_company(email="other@example.com", name="Other")
    job_id = client.post("/api/jobs", json=job_payload, headers=company_headers).json()["id"]

    response = client.put(f"/api/jobs/{job_id}", json={"title": "Hijacked"}, headers=headers_for(other.user))
    assert response.status_code == 404
    assert client.get(f"/api/jobs/public/{job_id}").json()["title"] == "Backend Engineer"


def test_delete_job(client, company_headers, job_payload):
    job_id = client.post("/api/jobs", json=job_payload, headers=company_headers).json()["id"]

    response = client.delete(f"/api/jobs/{job_id}", headers=company_headers)
    assert response.status_code == 200
    assert client.get(f"/api/jobs/public/{job_id}").status_code == 404
    assert client.delete(f"/api/jobs/{job_id}", headers=company_headers).status_code == 404
