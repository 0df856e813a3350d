from immoauto.core.security import create_refresh_token

PASSWORD = "Secret123"


def _register(client, email="jane@example.com", password=PASSWORD, name="Jane"):
    return client.post("/api/auth/register", json={"email": email, "password": password, "name": name})


def _login(client, email="jane@example.com", password=PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"


def test_register_and_login(client):
    r = _register(client, email="Jane@Example.com")
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["user"]["email"] == "jane@example.com"
    assert data["user"]["role"] == "USER"
    assert data["accessToken"] and data["refreshToken"]
    assert "hashedPassword" not in data["user"]

    r = _login(client, email="JANE@example.com")
    assert r.status_code == 200
    assert r.json()["data"]["user"]["name"] == "Jane"


def test_duplicate_email_is_conflict(client):
    assert _register(client).status_code == 201
    r = _register(client, email="JANE@example.com")
    assert r.status_code == 409
    assert r.json()["statusCode"] == 409


def test_weak_password_rejected(client):
    for weak in ("short1A", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere"):
        r = _register(client, password=weak)
        assert r.status_code == 400, weak


def test_invalid_body_uses_error_envelope(client):
    r = client.post("/api/auth/register", json={"email": "not-an-email", "password": PASSWORD})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["path"] == "/api/auth/register"
    assert {e["field"] for e in body["errors"]} >= {"email", "name"}


def test_wrong_password_then_lockout(client):
    _register(client)
    for _ in range(5):
        assert _login(client, password="Wrong12345").status_code == 401
    r = _login(client)
    assert r.status_code == 423


def test_me_requires_token(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json()["success"] is False
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401


def test_me_returns_counts(client, make_user, make_property, make_vehicle):
    _, headers = make_user("Owner")
    make_property(headers)
    make_vehicle(headers)
    r = client.get("/api/auth/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["counts"] == {"properties": 1, "vehicles": 1, "favorites": 0}


def test_refresh_token(client):
    data = _register(client).json()["data"]
    r = client.post("/api/auth/refresh-token", json={"refreshToken": data["refreshToken"]})
    assert r.status_code == 200
    pair = r.json()["data"]
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {pair['accessToken']}"})
    assert r.status_code == 200

    # An access token is not accepted as a refresh token.
    r = client.post("/api/auth/refresh-token", json={"refreshToken": data["accessToken"]})
    assert r.status_code == 401


def test_logout_revokes_tokens(client):
    data = _register(client).json()["data"]
    headers = {"Authorization": f"Bearer {data['accessToken']}"}
    assert client.post("/api/auth/logout", headers=headers).status_code == 200
    assert client.get("/api/auth/me", headers=headers).status_code == 401
    r = client.post("/api/auth/refresh-token", json={"refreshToken": data["refreshToken"]})
    assert r.status_code == 401


def test_refresh_token_for_unknown_user(client):
    token = create_refresh_token("424242", 1)
    r = client.post("/api/auth/refresh-token", json={"refreshToken": token})
    assert r.status_code == 401
