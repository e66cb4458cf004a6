def test_record_and_list_actions(client, admin_headers):
    response = client.post(
        "/api/admin-actions",
        json={"action": "EXPORT_REPORT", "details": "Monthly applications export"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["action"] == "EXPORT_REPORT"
    assert created["adminEmail"] == "admin@example.com"

    client.post("/api/admin-actions", json={"action": "REVIEW_FLAGS"}, headers=admin_headers)

    listing = client.get("/api/admin-actions/all", headers=admin_headers).json()
    assert listing["pagination"] == {"total": 2, "page": 1, "limit": 20, "totalPages": 1}
    assert {a["action"] for a in listing["actions"]} == {"EXPORT_REPORT", "REVIEW_FLAGS"}


def test_search_and_page_actions(client, admin_headers):
    for i in range(3):
        client.post("/api/admin-actions", json={"action": f"TASK_{i}", "details": "routine"}, headers=admin_headers)
    client.post("/api/admin-actions", json={"action": "SPECIAL", "details": "one-off audit"}, headers=admin_headers)

    searched = client.get("/api/admin-actions/all", params={"search": "audit"}, headers=admin_headers).json()
    assert [a["action"] for a in searched["actions"]] == ["SPECIAL"]

    paged = client.get("/api/admin-actions/all", params={"page": 2, "limit": 3}, headers=admin_headers).json()
    assert len(paged["actions"]) == 1
    assert paged["pagination"]["totalPages"] == 2


def test_blank_action_rejected(client, admin_headers):
    assert client.post("/api/admin-actions", json={"action": "  "}, headers=admin_headers).status_code == 400


def test_admin_actions_require_admin(client, candidate_headers):
    assert client.get("/api/admin-actions/all", headers=candidate_headers).status_code == 403
    assert client.post("/api/admin-actions", json={"action": "X"}, headers=candidate_headers).status_code == 403
