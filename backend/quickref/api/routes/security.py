"""Security — OAuth2 password flow with bearer JWTs, plus API-key header extraction.

Invariants:
    - POST /token accepts form fields only (OAuth2PasswordRequestForm)
    - Wrong username and wrong password produce the same 401
    - /users/me: 401 for missing/invalid/expired token, 400 for a disabled user
    - /api-key/protected: 401 unless X-API-Key matches a configured key
"""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm

from quickref.api.deps import (
    SettingsDep, get_current_active_user, verify_api_key,
)
from quickref.core.errors import AuthenticationError
from quickref.core.security import UserRecord, create_access_token, user_store
from quickref.schemas.user import Token, UserPublic

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/security", tags=["security"])


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form: Annotated[OAuth2PasswordRequestForm, Depends()],
    settings: SettingsDep,
):
    user = user_store.authenticate(form.username, form.password)
    if user is None:
        raise AuthenticationError("Incorrect username or password")
    expires = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(
        user.username, settings.secret_key, settings.jwt_algorithm, expires,
    )
    logger.info(f"Issued access token for '{user.username}'")
    return Token(access_token=token, expires_in=int(expires.total_seconds()))


@router.get("/users/me", response_model=UserPublic)
async def read_users_me(
    user: Annotated[UserRecord, Depends(get_current_active_user)],
):
    return UserPublic(
        username=user.username, email=user.email,
        full_name=user.full_name, disabled=user.disabled,
    )


@router.get("/api-key/protected")
async def api_key_protected(key: Annotated[str, Depends(verify_api_key)]):
    return {"message": "API key accepted", "key_suffix": key[-4:]}
