"""Shared Dependencies — reusable parameter-resolution callables used across sections.

Invariants:
    - Dependencies raise QuickRefError subclasses (never bare HTTPException) so every
      failure goes through the global error envelope
    - managed_resource records "open" before yielding and "close" in finally,
      so teardown is observable even when the endpoint raises
    - Security dependencies never reveal whether a username or key exists

Design Decisions:
    - OAuth2PasswordBearer / APIKeyHeader with auto_error=False: missing credentials
      raise AuthenticationError (uniform envelope + WWW-Authenticate) instead of
      FastAPI's default 401/403 body
"""

import logging
from typing import Annotated, AsyncGenerator
from uuid import uuid4

from fastapi import BackgroundTasks, Cookie, Depends, Header, Query
from fastapi.security import APIKeyHeader, OAuth2PasswordBearer

from quickref.config import Settings, get_settings
from quickref.core.errors import AuthenticationError, InactiveUserError
from quickref.core.event_log import notification_log, resource_log
from quickref.core.security import (
    UserRecord, api_key_matches, decode_access_token, user_store,
)

logger = logging.getLogger(__name__)

SettingsDep = Annotated[Settings, Depends(get_settings)]


# ─── Dependencies section ───────────────────────────────────────

async def pagination_params(
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
) -> dict[str, int]:
    """Function dependency: offset pagination."""
    return {"skip": skip, "limit": limit}


class CommonQueryParams:
    """Class dependency: FastAPI calls __init__ with resolved query params."""

    def __init__(
        self,
        q: str | None = None,
        skip: int = Query(0, ge=0),
        limit: int = Query(10, ge=1, le=100),
    ):
        self.q = q
        self.skip = skip
        self.limit = limit


def query_extractor(q: str | None = None) -> str | None:
    return q


def query_or_cookie_extractor(
    q: Annotated[str | None, Depends(query_extractor)],
    last_query: Annotated[str | None, Cookie()] = None,
) -> dict[str, str | None]:
    """Sub-dependency: prefer the query param, fall back to the last_query cookie."""
    if q:
        return {"value": q, "source": "query"}
    return {"value": last_query, "source": "cookie" if last_query else None}


async def managed_resource() -> AsyncGenerator[dict[str, str], None]:
    """Yield dependency: resource open for the request, closed after the response."""
    resource = {"id": uuid4().hex[:8]}
    resource_log.record("open", resource["id"])
    try:
        yield resource
    finally:
        resource_log.record("close", resource["id"])


async def verify_token_header(
    settings: SettingsDep,
    x_token: Annotated[str | None, Header()] = None,
) -> None:
    """Router-level dependency: requires X-Token to match settings.token_header_value."""
    if x_token != settings.token_header_value:
        raise AuthenticationError("X-Token header invalid", scheme="X-Token")


# ─── Security section ───────────────────────────────────────────

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/security/token", auto_error=False,
)
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def get_current_user(
    settings: SettingsDep,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> UserRecord:
    if not token:
        raise AuthenticationError("Not authenticated")
    payload = decode_access_token(token, settings.secret_key, settings.jwt_algorithm)
    username = payload.get("sub") if payload else None
    if not username:
        raise AuthenticationError()
    user = user_store.get(username)
    if user is None:
        raise AuthenticationError()
    return user


async def get_current_active_user(
    user: Annotated[UserRecord, Depends(get_current_user)],
) -> UserRecord:
    if user.disabled:
        raise InactiveUserError(user.username)
    return user


async def verify_api_key(
    settings: SettingsDep,
    key: Annotated[str | None, Depends(api_key_header)],
) -> str:
    if not api_key_matches(key, settings.api_keys):
        logger.info("Rejected request with missing or unknown API key")
        raise AuthenticationError("Invalid or missing API key", scheme="APIKey")
    return key


# ─── Background Tasks section ───────────────────────────────────

def write_notification(email: str, message: str = "") -> None:
    """Deferred work: append to the notification log."""
    notification_log.record("notification", f"{email}: {message}")
    logger.info(f"Notification delivered to {email}")


def audit_query(
    background_tasks: BackgroundTasks, q: str | None = None,
) -> str | None:
    """Dependency that schedules its own background task before the handler's."""
    if q:
        background_tasks.add_task(notification_log.record, "query", q)
    return q
