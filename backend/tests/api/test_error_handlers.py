"""Error Handlers — domain, validation and catch-all handlers on a bare app.

Invariants:
    - QuickRefError subclasses keep their status and headers
    - Uncaught exceptions become a 500 envelope without internal details
"""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from quickref.api.error_handlers import register_error_handlers
from quickref.core.errors import AuthenticationError, DatabaseError


def _app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/auth")
    async def auth():
        raise AuthenticationError()

    @app.get("/db")
    async def db():
        raise DatabaseError("connection refused", "execute")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internal detail")

    @app.get("/typed/{n}")
    async def typed(n: int):
        return {"n": n}

    return app


async def _client(app: FastAPI) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    )


async def test_authentication_error_carries_challenge_header():
    async with await _client(_app()) as c:
        res = await c.get("/auth")
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"
    assert res.json()["error"]["category"] == "authentication"


async def test_database_error_is_503_critical():
    async with await _client(_app()) as c:
        res = await c.get("/db")
    assert res.status_code == 503
    error = res.json()["error"]
    assert error["code"] == "DATABASE_ERROR"
    assert error["severity"] == "critical"


async def test_unhandled_exception_hides_details():
    async with await _client(_app()) as c:
        res = await c.get("/boom")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in res.text


async def test_validation_error_envelope():
    async with await _client(_app()) as c:
        res = await c.get("/typed/abc")
    assert res.status_code == 422
    detail = res.json()["error"]["details"][0]
    assert detail["field"] == "path.n"
    assert detail["type"] == "int_parsing"
