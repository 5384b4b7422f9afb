def test_signup_returns_token(api_client):
    response = api_client.post("/auth/signup", json={
        "name": "New User",
        "email": "New.User@Example.com",
        "password": "password123",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]


def test_signup_duplicate_email(api_client, make_user):
    make_user(email="dup@example.com")
    response = api_client.post("/auth/signup", json={
        "name": "Again",
        "email": "DUP@example.com",
        "password": "password123",
    })
    assert response.status_code == 400


def test_signup_rejects_invalid_email(api_client):
    response = api_client.post("/auth/signup", json={
        "name": "Bad",
        "email": "not-an-email",
        "password": "password123",
    })
    assert response.status_code == 422


def test_login(api_client, make_user):
    make_user(email="login@example.com", password="correct-horse")

    ok = api_client.post("/auth/login", json={"email": "login@example.com", "password": "correct-horse"})
    assert ok.status_code == 200
    assert ok.json()["access_token"]

    bad = api_client.post("/auth/login", json={"email": "login@example.com", "password": "wrong-password"})
    assert bad.status_code == 401


def test_protected_route_requires_token(api_client):
    response = api_client.get("/obligations/")
    assert response.status_code in (401, 403)


def test_invalid_token_rejected(api_client):
    response = api_client.get("/obligations/", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_logout_invalidates_token(api_client, auth_headers):
    assert api_client.get("/obligations/", headers=auth_headers).status_code == 200

    response = api_client.post("/auth/logout", headers=auth_headers)
    assert response.status_code == 200

    response = api_client.get("/obligations/", headers=auth_headers)
    assert response.status_code == 401
