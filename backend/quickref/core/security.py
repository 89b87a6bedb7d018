"""Security Primitives — argon2 password hashing, JWT access tokens, API-key checks.

Invariants:
    - Plain passwords never stored: UserStore keeps argon2 hashes only
    - Tokens carry `sub` and `exp`; decode_access_token returns None on any failure
    - API keys compared with hmac.compare_digest (constant time)

Design Decisions:
    - In-memory UserStore seeded from settings: the Security section demonstrates
      extraction and verification, not user management
"""

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt

logger = logging.getLogger(__name__)

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return _hasher.verify(hashed, plain)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(
    subject: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
) -> str:
    """Create a signed JWT for `subject`.

    Args:
        subject: Value of the `sub` claim (the username)
        expires_delta: Token lifetime; defaults to 15 minutes
        now_utc: Current time, injectable for deterministic tests
    """
    current_time = now_utc if now_utc is not None else datetime.now(timezone.utc)
    expire = current_time + (expires_delta or timedelta(minutes=15))
    return jwt.encode(
        {"sub": subject, "exp": expire}, secret_key, algorithm=algorithm,
    )


def decode_access_token(
    token: str, secret_key: str, algorithm: str = "HS256",
) -> dict[str, Any] | None:
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None


def api_key_matches(candidate: str | None, valid_keys: list[str]) -> bool:
    if not candidate:
        return False
    # Compare against every key so timing does not reveal which one matched
    matched = False
    for key in valid_keys:
        if hmac.compare_digest(candidate.encode(), key.encode()):
            matched = True
    return matched


@dataclass
class UserRecord:
    username: str
    hashed_password: str
    full_name: str | None = None
    email: str | None = None
    disabled: bool = False


class UserStore:
    """In-memory user table keyed by username."""

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}

    def add(
        self, username: str, password: str, *, disabled: bool = False,
        full_name: str | None = None, email: str | None = None,
    ) -> UserRecord:
        record = UserRecord(
            username=username,
            hashed_password=hash_password(password),
            full_name=full_name,
            email=email,
            disabled=disabled,
        )
        self._users[username] = record
        return record

    def get(self, username: str) -> UserRecord | None:
        return self._users.get(username)

    def authenticate(self, username: str, password: str) -> UserRecord | None:
        user = self.get(username)
        if user is None or not verify_password(password, user.hashed_password):
            logger.info(f"Failed login for '{username}'")
            return None
        return user

    def clear(self) -> None:
        self._users.clear()

    def __len__(self) -> int:
        return len(self._users)


def seed_users(
    store: UserStore, users: dict[str, str], disabled: list[str],
) -> None:
    """Populate the store from settings.demo_users / settings.disabled_users."""
    for username, password in users.items():
        store.add(
            username, password,
            disabled=username in disabled,
            full_name=username.title(),
            email=f"{username}@example.com",
        )


user_store = UserStore()
