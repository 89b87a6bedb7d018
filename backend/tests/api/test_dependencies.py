"""Dependencies — function, class, sub-, yield and router-level dependencies."""

from quickref.config import get_settings
from quickref.core.event_log import resource_log

TOKEN_HEADERS = {"X-Token": get_settings().token_header_value}


async def test_router_dependency_rejects_missing_token(client):
    res = await client.get("/api/v1/dependencies/items")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"
    assert res.headers["www-authenticate"] == "X-Token"


async def test_router_dependency_rejects_wrong_token(client):
    res = await client.get("/api/v1/dependencies/items", headers={"X-Token": "nope"})
    assert res.status_code == 401


async def test_pagination_dependency_slices_items(client):
    res = await client.get(
        "/api/v1/dependencies/items", params={"skip": 1, "limit": 2}, headers=TOKEN_HEADERS,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["page"] == {"skip": 1, "limit": 2}
    assert [i["item_name"] for i in body["items"]] == ["Bar", "Baz"]


async def test_pagination_dependency_validates_limit(client):
    res = await client.get(
        "/api/v1/dependencies/items", params={"limit": 0}, headers=TOKEN_HEADERS,
    )
    assert res.status_code == 422


async def test_class_dependency(client):
    res = await client.get(
        "/api/v1/dependencies/users", params={"q": "ada", "limit": 5}, headers=TOKEN_HEADERS,
    )
    assert res.json() == {"skip": 0, "limit": 5, "q": "ada"}


async def test_sub_dependency_prefers_query(client):
    res = await client.get(
        "/api/v1/dependencies/query", params={"q": "from-query"},
        headers={**TOKEN_HEADERS, "Cookie": "last_query=from-cookie"},
    )
    assert res.json() == {"q_or_cookie": "from-query", "source": "query"}


async def test_sub_dependency_falls_back_to_cookie(client):
    res = await client.get(
        "/api/v1/dependencies/query",
        headers={**TOKEN_HEADERS, "Cookie": "last_query=from-cookie"},
    )
    assert res.json() == {"q_or_cookie": "from-cookie", "source": "cookie"}


async def test_sub_dependency_with_neither(client):
    res = await client.get("/api/v1/dependencies/query", headers=TOKEN_HEADERS)
    assert res.json() == {"q_or_cookie": None, "source": None}


async def test_yield_dependency_is_open_during_request_and_closed_after(client):
    res = await client.get("/api/v1/dependencies/resource", headers=TOKEN_HEADERS)
    assert res.status_code == 200
    assert res.json()["events"] == ["open"]

    resource_id = res.json()["resource_id"]
    events = [(e.kind, e.detail) for e in resource_log.entries()]
    assert events == [("open", resource_id), ("close", resource_id)]
