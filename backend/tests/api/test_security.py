"""Security — OAuth2 password flow with JWT bearer tokens and API-key extraction."""

from datetime import datetime, timedelta, timezone

from quickref.config import get_settings
from quickref.core.security import create_access_token


async def _login(client, username: str, password: str):
    return await client.post(
        "/api/v1/security/token",
        data={"username": username, "password": password},
    )


async def test_token_issued_for_valid_credentials(client, seeded_users):
    res = await _login(client, "alice", seeded_users["alice"])
    assert res.status_code == 200
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["expires_in"] == get_settings().access_token_expire_minutes * 60


async def test_wrong_password_and_unknown_user_look_the_same(client, seeded_users):
    wrong_pw = await _login(client, "alice", "not-it")
    unknown = await _login(client, "mallory", "whatever")
    assert wrong_pw.status_code == unknown.status_code == 401
    assert wrong_pw.json()["error"]["message"] == unknown.json()["error"]["message"]


async def test_token_endpoint_requires_form_fields(client):
    res = await client.post("/api/v1/security/token", json={"username": "alice"})
    assert res.status_code == 422


async def test_users_me_with_valid_token(client, seeded_users):
    token = (await _login(client, "alice", seeded_users["alice"])).json()["access_token"]
    res = await client.get(
        "/api/v1/security/users/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 200
    assert res.json() == {
        "username": "alice",
        "email": "alice@example.com",
        "full_name": "Alice",
        "disabled": False,
    }


async def test_users_me_without_token_is_401_with_challenge(client):
    res = await client.get("/api/v1/security/users/me")
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"


async def test_users_me_with_garbage_token(client, seeded_users):
    res = await client.get(
        "/api/v1/security/users/me", headers={"Authorization": "Bearer not.a.jwt"},
    )
    assert res.status_code == 401


async def test_users_me_with_expired_token(client, seeded_users):
    settings = get_settings()
    token = create_access_token(
        "alice", settings.secret_key, settings.jwt_algorithm,
        expires_delta=timedelta(minutes=5),
        now_utc=datetime.now(timezone.utc) - timedelta(hours=1),
    )
    res = await client.get(
        "/api/v1/security/users/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401


async def test_users_me_with_token_for_deleted_user(client, seeded_users):
    settings = get_settings()
    token = create_access_token("nobody", settings.secret_key, settings.jwt_algorithm)
    res = await client.get(
        "/api/v1/security/users/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401


async def test_disabled_user_gets_400(client, seeded_users):
    token = (await _login(client, "bob", seeded_users["bob"])).json()["access_token"]
    res = await client.get(
        "/api/v1/security/users/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INACTIVE_USER"


async def test_api_key_accepted(client):
    key = get_settings().api_keys[0]
    res = await client.get("/api/v1/security/api-key/protected", headers={"X-API-Key": key})
    assert res.status_code == 200
    assert res.json()["key_suffix"] == key[-4:]


async def test_api_key_missing_or_wrong_is_unauthorized(client):
    missing = await client.get("/api/v1/security/api-key/protected")
    wrong = await client.get(
        "/api/v1/security/api-key/protected", headers={"X-API-Key": "wrong"},
    )
    assert missing.status_code == wrong.status_code == 401
    assert missing.headers["www-authenticate"] == "APIKey"
