"""Request/Response Models — body parsing, response filtering, computed fields."""


async def test_create_item_returns_201_with_price_with_tax(client):
    res = await client.post("/api/v1/models/items", json={
        "name": "  Widget ", "price": 10.0, "tax": 1.5, "tags": ["a", "b", "a"],
    })
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Widget"
    assert body["price_with_tax"] == 11.5
    assert body["tags"] == ["a", "b"]


async def test_create_item_without_tax(client):
    res = await client.post("/api/v1/models/items", json={"name": "Gadget", "price": 3})
    assert res.json()["price_with_tax"] == 3.0
    assert res.json()["tax"] is None


async def test_create_item_rejects_non_positive_price(client):
    res = await client.post("/api/v1/models/items", json={"name": "Free", "price": 0})
    assert res.status_code == 422
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert "body.price" in fields


async def test_response_model_drops_password(client):
    res = await client.post("/api/v1/models/users", json={
        "username": "ada_l", "password": "correct-horse",
        "email": "ada@example.com",
    })
    assert res.status_code == 201
    body = res.json()
    assert "password" not in body
    assert body == {"username": "ada_l", "email": "ada@example.com", "full_name": None}


async def test_user_with_invalid_email_is_rejected(client):
    res = await client.post("/api/v1/models/users", json={
        "username": "ada_l", "password": "correct-horse", "email": "nope",
    })
    assert res.status_code == 422


async def test_put_combines_path_query_and_body(client):
    res = await client.put(
        "/api/v1/models/items/7", params={"q": "extra"},
        json={"name": "Widget", "price": 2.5},
    )
    body = res.json()
    assert body["item_id"] == 7
    assert body["q"] == "extra"
    assert body["name"] == "Widget"
