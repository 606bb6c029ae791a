from plantdaddy.shared.core.security import create_access_token
from tests.helpers import API, bearer, register


async def test_register_returns_token_and_user(client):
    body = await register(client, "carol")

    assert body["tokenType"] == "bearer"
    assert body["accessToken"]
    assert body["user"]["username"] == "carol"
    assert body["user"]["isAdmin"] is False


async def test_register_seeds_default_locations(client, alice):
    response = await client.get(f"{API}/locations", headers=bearer(alice))
    locations = response.json()

    assert response.status_code == 200
    assert {"Living Room", "Bedroom", "Kitchen", "Bathroom"} <= {loc["name"] for loc in locations}
    assert all(loc["isDefault"] for loc in locations)


async def test_duplicate_username_is_conflict(client, alice):
    response = await client.post(f"{API}/auth/register", json={"username": "ALICE", "password": "secret123"})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"


async def test_short_password_is_rejected(client):
    response = await client.post(f"{API}/auth/register", json={"username": "dave", "password": "123"})

    assert response.status_code == 422


async def test_login(client, alice):
    ok = await client.post(f"{API}/auth/login", json={"username": "alice", "password": "secret123"})
    wrong = await client.post(f"{API}/auth/login", json={"username": "alice", "password": "nope-nope"})
    unknown = await client.post(f"{API}/auth/login", json={"username": "nobody", "password": "secret123"})

    assert ok.status_code == 200
    assert ok.json()["user"]["id"] == alice["user"]["id"]
    assert wrong.status_code == 401
    assert unknown.status_code == 401
    assert wrong.json()["error"]["message"] == unknown.json()["error"]["message"]


async def test_me(client, alice):
    response = await client.get(f"{API}/auth/me", headers=bearer(alice))

    assert response.status_code == 200
    assert response.json()["username"] == "alice"


async def test_protected_routes_need_a_valid_token(client):
    missing = await client.get(f"{API}/plants")
    garbage = await client.get(f"{API}/plants", headers={"Authorization": "Bearer not-a-jwt"})
    bad_subject = await client.get(
        f"{API}/plants",
        headers={"Authorization": f"Bearer {create_access_token({'sub': 'abc', 'username': 'x'})}"},
    )

    for response in (missing, garbage, bad_subject):
        assert response.status_code == 401
        error = response.json()["error"]
        assert error["code"] == "AUTHENTICATION_ERROR"
        assert "timestamp" in error


async def test_request_id_is_echoed(client):
    response = await client.get(f"{API}/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-123"


async def test_unknown_route_uses_error_envelope(client, alice):
    response = await client.get(f"{API}/does-not-exist", headers=bearer(alice))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
