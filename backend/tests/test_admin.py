def test_admin_routes_require_admin_role(client, make_user):
    _, headers = make_user()
    assert client.get("/api/admin/dashboard", headers=headers).status_code == 403
    assert client.get("/api/admin/dashboard").status_code == 401


def test_dashboard_counts(client, make_admin, make_user, make_property, make_vehicle):
    _, admin = make_admin()
    _, seller = make_user()
    make_property(seller)
    make_vehicle(seller, status=None)

    r = client.get("/api/admin/dashboard", headers=admin)
    assert r.status_code == 200
    stats = r.json()["data"]
    assert stats["users"] == {"total": 2, "active": 2, "suspended": 0, "banned": 0}
    assert stats["listings"] == {"properties": 1, "vehicles": 1, "pendingModeration": 1}
    assert stats["pendingReports"] == 0
    assert stats["newUsersThisWeek"] == 2


def test_moderation_approve_and_reject(client, make_admin, make_user, make_property, make_vehicle):
    _, admin = make_admin()
    _, seller = make_user()
    prop = make_property(seller, status=None)
    vehicle = make_vehicle(seller, status=None)

    pending = client.get("/api/admin/moderation/pending", headers=admin).json()["data"]
    assert [p["id"] for p in pending["properties"]] == [prop["id"]]
    assert [v["id"] for v in pending["vehicles"]] == [vehicle["id"]]

    r = client.post(f"/api/admin/moderation/property/{prop['id']}", json={"action": "approve"}, headers=admin)
    assert r.status_code == 200
    assert r.json()["message"] == "Listing approved"
    assert r.json()["data"]["status"] == "ACTIVE"

    r = client.post(
        f"/api/admin/moderation/vehicle/{vehicle['id']}",
        json={"action": "reject", "message": "Photos missing"},
        headers=admin,
    )
    assert r.json()["message"] == "Listing rejected"
    assert r.json()["data"]["status"] == "INACTIVE"

    actions = [log["action"] for log in client.get("/api/admin/logs", headers=admin).json()["data"]]
    assert actions[:2] == ["listing_rejected", "listing_approved"]


def test_status_override_bypasses_transition_table(client, make_admin, make_user, make_property):
    _, admin = make_admin()
    _, seller = make_user()
    prop = make_property(seller, status="SOLD")

    r = client.patch(f"/api/admin/listings/property/{prop['id']}/status", json={"status": "ACTIVE"}, headers=admin)
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "ACTIVE"

    listed = client.get("/api/admin/listings", params={"type": "property"}, headers=admin).json()
    assert listed["total"] == 1
    assert listed["data"][0]["kind"] == "property"

    assert client.delete(f"/api/admin/listings/property/{prop['id']}", headers=admin).status_code == 200
    assert client.get(f"/api/admin/listings/property/{prop['id']}", headers=admin).status_code == 404


def test_suspension_revokes_access(client, make_admin, make_user):
    _, admin = make_admin()
    user_id, headers = make_user(email="suspect@example.com")

    r = client.patch(
        f"/api/admin/users/{user_id}/status",
        json={"status": "SUSPENDED", "reason": "Spam"},
        headers=admin,
    )
    assert r.status_code == 200
    assert r.json()["data"]["suspendedReason"] == "Spam"

    assert client.get("/api/auth/me", headers=headers).status_code == 401
    r = client.post("/api/auth/login", json={"email": "suspect@example.com", "password": "Secret123"})
    assert r.status_code == 403

    client.patch(f"/api/admin/users/{user_id}/status", json={"status": "ACTIVE"}, headers=admin)
    r = client.post("/api/auth/login", json={"email": "suspect@example.com", "password": "Secret123"})
    assert r.status_code == 200


def test_admins_are_protected(client, make_admin):
    admin_id, admin = make_admin()
    other_id, _ = make_admin("Second Admin")

    assert client.patch(f"/api/admin/users/{admin_id}/role", json={"role": "USER"}, headers=admin).status_code == 400
    r = client.patch(f"/api/admin/users/{other_id}/status", json={"status": "BANNED"}, headers=admin)
    assert r.status_code == 403
    assert client.delete(f"/api/admin/users/{other_id}", headers=admin).status_code == 403


def test_user_management(client, make_admin, make_user):
    _, admin = make_admin()
    user_id, _ = make_user("Jane Doe")

    r = client.get("/api/admin/users", params={"search": "jane"}, headers=admin)
    assert [u["id"] for u in r.json()["data"]] == [user_id]

    r = client.patch(f"/api/admin/users/{user_id}/role", json={"role": "ADMIN"}, headers=admin)
    assert r.json()["data"]["role"] == "ADMIN"
    client.patch(f"/api/admin/users/{user_id}/role", json={"role": "USER"}, headers=admin)

    assert client.delete(f"/api/admin/users/{user_id}", headers=admin).status_code == 200
    assert client.get(f"/api/admin/users/{user_id}", headers=admin).status_code == 404


def test_report_lifecycle(client, make_admin, make_user, make_property):
    _, admin = make_admin()
    _, seller = make_user()
    reporter_id, reporter = make_user()
    prop = make_property(seller)

    assert client.post("/api/reports", json={"propertyId": prop["id"], "reason": "short"}, headers=reporter).status_code == 400
    r = client.post(
        "/api/reports",
        json={"propertyId": prop["id"], "reason": "Listing looks like a scam"},
        headers=reporter,
    )
    assert r.status_code == 201
    report_id = r.json()["data"]["id"]

    reports = client.get("/api/admin/reports", params={"status": "PENDING"}, headers=admin).json()["data"]
    assert reports[0]["reporter"]["id"] == reporter_id
    assert reports[0]["property"]["id"] == prop["id"]

    r = client.patch(
        f"/api/admin/reports/{report_id}",
        json={"status": "RESOLVED", "resolution": "Listing removed"},
        headers=admin,
    )
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "RESOLVED"
    assert r.json()["data"]["resolvedAt"] is not None
    assert client.get("/api/admin/reports", params={"status": "PENDING"}, headers=admin).json()["data"] == []
