"""
StackIt Backend - Password Hashing & Bearer Tokens
===================================================

What:  bcrypt password hashing, JWT issue/verify, and the FastAPI
       dependency that resolves the calling user from the
       `Authorization: Bearer <token>` header.
How:   Tokens are HS256 JWTs carrying `{"id": <user id>}` plus `exp`,
       `iat` and a random `jti` (two tokens issued in the same second still
       differ). Hashing runs in Starlette's threadpool so bcrypt's CPU work
       does not block the event loop.
Who:   UserService (hash/verify/issue) and every authenticated route
       (get_current_user_id).
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.concurrency import run_in_threadpool

from stackit.config import settings
from stackit.exceptions import AuthenticationError
from stackit.ids import parse_id

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; newer releases refuse longer input
BCRYPT_MAX_BYTES = 72

bearer_scheme = HTTPBearer(auto_error=False)


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


async def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    hashed = await run_in_threadpool(bcrypt.hashpw, _password_bytes(password), salt)
    return hashed.decode("utf-8")


async def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return await run_in_threadpool(
            bcrypt.checkpw, _password_bytes(password), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(user_id: uuid.UUID, expires_in_seconds: int) -> str:
    """Sign a token for `user_id` that expires `expires_in_seconds` from now."""
    now = datetime.now(timezone.utc)
    payload = {
        "id": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=expires_in_seconds),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify signature and expiry and return the user id the token carries.

    Raises:
        AuthenticationError: expired, tampered, or malformed token.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(message="Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError(message="Invalid token")

    user_id = parse_id(payload.get("id"))
    if user_id is None:
        raise AuthenticationError(message="Invalid token")
    return user_id


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> uuid.UUID:
    """
    FastAPI dependency for authenticated routes.

    A missing header, a non-Bearer scheme, or an invalid token all yield 401.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Unauthorized")
    return decode_access_token(credentials.credentials)
