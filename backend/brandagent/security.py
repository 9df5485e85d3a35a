"""
BrandAgent Backend - Password Hashing & Session Tokens
========================================================

What:  Thin wrappers over passlib (bcrypt) and PyJWT.
Why:   Keeps the primitives in one place so services and tests share the
       exact same hashing context and token format.

Token format:
    HS256 JWT carrying {id, email, role, iat, exp}. Verification returns the
    claims or None; callers cannot tell an expired token from a forged one.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)


def build_password_context(rounds: int = 10) -> CryptContext:
    """bcrypt context with a fixed cost factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(context: CryptContext, password: str) -> str:
    return context.hash(password)


def verify_password(context: CryptContext, plain: str, hashed: str) -> bool:
    """Constant-time comparison is done by bcrypt; malformed hashes count as a mismatch."""
    try:
        return context.verify(plain, hashed)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(
    claims: Dict[str, Any],
    secret: str,
    algorithm: str = "HS256",
    expires_delta: timedelta = timedelta(hours=24),
    now: Optional[datetime] = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload.update({"iat": issued_at, "exp": issued_at + expires_delta})
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: Optional[str],
    secret: str,
    algorithm: str = "HS256",
) -> Optional[Dict[str, Any]]:
    """
    Verify signature and expiry.

    Returns the decoded claims, or None for any failure: missing token,
    malformed token, bad signature, expired. The reason is logged at DEBUG
    only.
    """
    if not token:
        return None
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        logger.debug("Token rejected: %s", type(exc).__name__)
        return None
