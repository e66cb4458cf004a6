def test_hiring_flow(client, admin_headers, email_service):
    # Company signs up and waits for approval
    signup = client.post("/api/auth/company/signup", json={
        "companyName": "Acme",
        "email": "hr@acme.com",
        "password": "acme-password",
    })
    assert signup.status_code == 201
    company_id = signup.json()["company"]["id"]

    credentials = {"email": "hr@acme.com", "password": "acme-password", "role": "COMPANY"}
    assert client.post("/api/auth/login", json=credentials).status_code == 403

    activated = client.patch(f"/api/companies/{company_id}/status", json={"status": "ACTIVE"}, headers=admin_headers)
    assert activated.status_code == 200

    # Company logs in and posts a job without a deadline
    login = client.post("/api/auth/login", json=credentials)
    assert login.status_code == 200
    company_headers = {"Authorization": f"Bearer {login.json()['token']}"}

    job = client.post(
        "/api/jobs",
        json={"title": "Backend Engineer", "description": "Build the platform."},
        headers=company_headers,
    ).json()
    assert job["deadline"] is None

    # Candidate signs up, logs in, fills in the profile
    assert client.post("/api/auth/candidate/signup", json={
        "email": "jane@example.com",
        "password": "jane-password",
    }).status_code == 201
    login = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "jane-password", "role": "CANDIDATE"})
    candidate_headers = {"Authorization": f"Bearer {login.json()['token']}"}

    profile = client.put("/api/candidate/profile", json={
        "firstName": "Jane",
        "lastName": "Doe",
        "profile": {"phone": "555-0100"},
    }, headers=candidate_headers)
    assert profile.status_code == 200
    assert profile.json()["submitted"] is False

    edited = client.put("/api/candidate/profile", json={
        "firstName": "Jane",
        "lastName": "Doe",
        "profile": {"phone": "555-0199"},
    }, headers=candidate_headers)
    assert edited.status_code == 200
    assert edited.json()["profile"] == {"phone": "555-0199"}

    # Applying freezes the profile
    applied = client.post("/api/applications", json={
        "jobId": job["id"],
        "profile": {"firstName": "Jane", "lastName": "Doe", "phone": "555-0199"},
    }, headers=candidate_headers)
    assert applied.status_code == 201

    assert client.get("/api/candidate/profile", headers=candidate_headers).json()["submitted"] is True
    locked = client.put("/api/candidate/profile", json={"firstName": "J", "lastName": "D"}, headers=candidate_headers)
    assert locked.status_code == 403

    # The company reviews the application
    listed = client.get("/api/applications/company", headers=company_headers).json()["applications"]
    assert [a["candidate"]["email"] for a in listed] == ["jane@example.com"]

    accepted = client.patch(
        f"/api/applications/{listed[0]['id']}/status",
        json={"status": "ACCEPTED"},
        headers=company_headers,
    )
    assert accepted.json()["status"] == "ACCEPTED"
    assert email_service.sent_to("jane@example.com")

    jobs = client.get("/api/jobs/my-jobs", headers=company_headers).json()
    assert jobs[0]["applicationsCount"] == 1


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").status_code == 200
