"""
Malls API Backend — Password Hashing & Token Signing
======================================================

What:  bcrypt password hashing (passlib) and HS256 x-auth-token JWTs (python-jose).
Who:   UserService (register/authenticate) and the authorization gate in
       dependencies.py.

Token payload:
    {"_id": "<user uuid>", "isAdmin": false, "exp": <unix ts>}

Tokens are stateless: there is no revocation list, an issued token is valid
until its exp claim passes.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from mallsapi.config import settings
from mallsapi.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)


# ── Password hashing ──────────────────────────────────────────────────────
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def get_password_hash(password: str) -> str:
    """Salts and hashes a plain-text password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time comparison of a plain password against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


# ── Tokens ────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TokenIdentity:
    """The caller identity recovered from a verified token."""

    user_id: uuid.UUID
    is_admin: bool = False


def create_access_token(
    user_id: uuid.UUID,
    is_admin: bool = False,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Signs a token embedding the user id and admin flag.

    Args:
        user_id:        Id of the authenticated user
        is_admin:       Admin flag at the time of issue
        expires_delta:  Lifetime override; defaults to settings.token_expire_minutes
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.token_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta
    payload = {"_id": str(user_id), "isAdmin": bool(is_admin), "exp": expire}
    return jwt.encode(payload, settings.jwt_private_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenIdentity:
    """
    Verifies signature and expiry and returns the embedded identity.

    Raises:
        InvalidTokenError: Bad signature, expired, malformed, or missing `_id`
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_private_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        logger.warning(f"Token rejected: {type(e).__name__}")
        raise InvalidTokenError()

    raw_id = payload.get("_id")
    if raw_id is None:
        raise InvalidTokenError()
    try:
        user_id = uuid.UUID(str(raw_id))
    except ValueError:
        raise InvalidTokenError()

    return TokenIdentity(user_id=user_id, is_admin=bool(payload.get("isAdmin", False)))
