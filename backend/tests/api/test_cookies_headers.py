"""Cookies & Headers — extraction (with underscore conversion rules) and setting."""


async def test_reads_cookie_and_headers(client):
    res = await client.get(
        "/api/v1/cookies-headers/read",
        headers=[
            ("Cookie", "ads_id=ad-123"),
            ("User-Agent", "pytest-agent"),
            ("X-Token", "foo"),
            ("X-Token", "bar"),
            ("strange_header", "kept"),
        ],
    )
    body = res.json()
    assert body["ads_id"] == "ad-123"
    assert body["user_agent"] == "pytest-agent"
    assert body["x_token"] == ["foo", "bar"]
    assert body["strange_header"] == "kept"


async def test_strange_header_not_matched_by_hyphenated_name(client):
    res = await client.get(
        "/api/v1/cookies-headers/read", headers={"strange-header": "converted"},
    )
    assert res.json()["strange_header"] is None


async def test_missing_values_are_none(client):
    res = await client.get("/api/v1/cookies-headers/read")
    body = res.json()
    assert body["ads_id"] is None
    assert body["x_token"] is None


async def test_set_cookie_flags_and_custom_header(client):
    res = await client.post("/api/v1/cookies-headers/cookie", params={"value": "xyz"})
    assert res.headers["x-cheat-sheet"] == "cookies"
    set_cookie = res.headers["set-cookie"]
    assert set_cookie.startswith("session=xyz")
    assert "HttpOnly" in set_cookie
    assert "SameSite=lax" in set_cookie


async def test_delete_cookie_expires_it(client):
    res = await client.delete("/api/v1/cookies-headers/cookie")
    set_cookie = res.headers["set-cookie"]
    assert set_cookie.startswith("session=")
    assert "Max-Age=0" in set_cookie
