"""Cookies & Headers — extracting and setting cookies and headers.

Invariants:
    - user_agent reads the User-Agent header (underscore → hyphen conversion)
    - strange_header is read verbatim (convert_underscores=False)
    - x_token collects every X-Token header value, in order
    - The session cookie is httponly with samesite=lax
"""

from typing import Annotated

from fastapi import APIRouter, Cookie, Header, Response

router = APIRouter(prefix="/api/v1/cookies-headers", tags=["cookies-headers"])

SESSION_COOKIE = "session"


@router.get("/read")
async def read_cookies_and_headers(
    ads_id: Annotated[str | None, Cookie()] = None,
    user_agent: Annotated[str | None, Header()] = None,
    x_token: Annotated[list[str] | None, Header()] = None,
    strange_header: Annotated[
        str | None, Header(convert_underscores=False)
    ] = None,
):
    return {
        "ads_id": ads_id,
        "user_agent": user_agent,
        "x_token": x_token,
        "strange_header": strange_header,
    }


@router.post("/cookie")
async def set_session_cookie(response: Response, value: str = "abc123"):
    response.set_cookie(
        key=SESSION_COOKIE, value=value, httponly=True, samesite="lax",
    )
    response.headers["X-Cheat-Sheet"] = "cookies"
    return {"message": "cookie set", "cookie": SESSION_COOKIE}


@router.delete("/cookie")
async def clear_session_cookie(response: Response):
    response.delete_cookie(key=SESSION_COOKIE)
    return {"message": "cookie cleared"}
