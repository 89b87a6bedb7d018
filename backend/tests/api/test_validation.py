"""Validation — query/path constraints and body validators surface as 422."""

import pytest


async def test_search_accepts_valid_query_and_repeated_tags(client):
    res = await client.get(
        "/api/v1/validation/search", params=[("q", "fast-api"), ("tag", "a"), ("tag", "b")],
    )
    assert res.status_code == 200
    assert res.json() == {"q": "fast-api", "tags": ["a", "b"]}


async def test_search_without_tags_returns_empty_list(client):
    res = await client.get("/api/v1/validation/search", params={"q": "fastapi"})
    assert res.json() == {"q": "fastapi", "tags": []}


@pytest.mark.parametrize("q", ["ab", "x" * 51, "Has Spaces"])
async def test_search_rejects_constraint_violations(client, q):
    res = await client.get("/api/v1/validation/search", params={"q": q})
    assert res.status_code == 422
    assert res.json()["error"]["details"][0]["field"] == "query.q"


async def test_search_requires_q(client):
    res = await client.get("/api/v1/validation/search")
    assert res.status_code == 422
    assert res.json()["error"]["details"][0]["type"] == "missing"


async def test_page_bounds(client):
    assert (await client.get("/api/v1/validation/pages/1")).status_code == 200
    assert (await client.get("/api/v1/validation/pages/1000")).status_code == 200
    assert (await client.get("/api/v1/validation/pages/0")).status_code == 422
    assert (await client.get("/api/v1/validation/pages/1001")).status_code == 422


async def test_page_offset(client):
    res = await client.get("/api/v1/validation/pages/3", params={"size": 10})
    assert res.json() == {"page": 3, "size": 10, "offset": 20}


async def test_signup_strips_username(client):
    res = await client.post("/api/v1/validation/signup", json={"username": "  ada ", "age": 36})
    assert res.status_code == 200
    assert res.json()["username"] == "ada"


async def test_signup_rejects_underage(client):
    res = await client.post("/api/v1/validation/signup", json={"username": "kid", "age": 9})
    assert res.status_code == 422


async def test_date_range_model_validator(client):
    ok = await client.post(
        "/api/v1/validation/date-range", json={"start": "2024-01-01", "end": "2024-01-31"},
    )
    assert ok.json()["days"] == 30

    bad = await client.post(
        "/api/v1/validation/date-range", json={"start": "2024-02-01", "end": "2024-01-01"},
    )
    assert bad.status_code == 422
    assert "end must not be before start" in bad.json()["error"]["details"][0]["message"]
