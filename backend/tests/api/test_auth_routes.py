"""Auth Routes — register, login, logout, me over HTTP with a cookie session."""

PASSWORD = "secret1"


async def test_register_returns_user_with_welcome_bonus(client):
    resp = await client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "secret1"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["tokensBalance"] == 100
    assert body["user"]["email"] == "ann@x.com"
    assert body["user"]["role"] == "USER"
    assert "password" not in body["user"]
    assert "passwordHash" not in body["user"]


async def test_register_does_not_sign_in(client):
    await client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "secret1"},
    )
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401


async def test_register_duplicate_email(client):
    payload = {"name": "Ann", "email": "ann@x.com", "password": "secret1"}
    await client.post("/api/auth/register", json=payload)
    resp = await client.post("/api/auth/register", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "User with this email already exists"


async def test_register_validation_details(client):
    resp = await client.post(
        "/api/auth/register",
        json={"name": "A", "email": "not-an-email", "password": "123"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation failed"
    fields = {d["field"] for d in body["details"]}
    assert fields == {"name", "email", "password"}


async def test_login_then_me(client, register_and_login):
    user = await register_and_login(client, "ann@x.com")
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 200
    me = resp.json()["user"]
    assert me["id"] == user["id"]
    assert me["tokensBalance"] == 100


async def test_login_wrong_password(client, register_and_login):
    await register_and_login(client, "ann@x.com")
    resp = await client.post(
        "/api/auth/login", json={"email": "ann@x.com", "password": "wrong-one"},
    )
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid email or password"


async def test_login_unknown_email_same_error(client):
    resp = await client.post(
        "/api/auth/login", json={"email": "ghost@x.com", "password": PASSWORD},
    )
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid email or password"


async def test_logout_clears_session(client, register_and_login):
    await register_and_login(client, "ann@x.com")
    resp = await client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert (await client.get("/api/auth/me")).status_code == 401


async def test_me_without_session(client):
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized", "code": "UNAUTHENTICATED"}


async def test_register_overlong_password_is_validation_error(client):
    resp = await client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "a" * 100},
    )
    assert resp.status_code == 400
    assert [d["field"] for d in resp.json()["details"]] == ["password"]


async def test_login_overlong_password_is_unauthorized(client, register_and_login):
    await register_and_login(client, "ann@x.com")
    resp = await client.post(
        "/api/auth/login", json={"email": "ann@x.com", "password": "a" * 100},
    )
    assert resp.status_code == 401
