"""Docs & CORS — the shipped cheat sheet served as sections plus its lint report."""

from quickref.core.domain_types import Section


async def test_sections_cover_every_required_section(client):
    res = await client.get("/api/v1/cheatsheet/sections")
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "FastAPI Cheat Sheet"
    titles = [s["title"] for s in body["sections"]]
    assert titles == [s.value for s in Section]
    assert body["section_count"] == len(titles)


async def test_every_section_has_a_code_block(client):
    body = (await client.get("/api/v1/cheatsheet/sections")).json()
    for section in body["sections"]:
        assert section["code_blocks"], section["title"]


async def test_get_single_section_case_insensitive(client):
    res = await client.get("/api/v1/cheatsheet/sections/database example")
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Database Example"
    assert body["code_blocks"][0]["language"] == "python"


async def test_section_title_with_slash(client):
    res = await client.get("/api/v1/cheatsheet/sections/Request/Response Models")
    assert res.status_code == 200


async def test_unknown_section_is_404(client):
    res = await client.get("/api/v1/cheatsheet/sections/GraphQL")
    assert res.status_code == 404


async def test_shipped_cheatsheet_lints_clean(client):
    res = await client.get("/api/v1/cheatsheet/lint")
    body = res.json()
    assert body["ok"] is True, body["issues"]
    assert body["error_count"] == 0
    assert body["docs_url"] == "/docs"
    assert body["redoc_url"] == "/redoc"


async def test_openapi_lists_section_tags(client):
    schema = (await client.get("/openapi.json")).json()
    tags = {t["name"] for t in schema["tags"]}
    assert {"routing", "security", "database", "docs-cors"} <= tags


async def test_docs_pages_served(client):
    assert (await client.get("/docs")).status_code == 200
    assert (await client.get("/redoc")).status_code == 200
