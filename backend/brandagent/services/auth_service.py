"""
BrandAgent Backend - Auth Service
===================================

What:  Registration, login and token validation.
Why:   Keeps credential rules out of the route handlers; routes only map
       request bodies to these calls.
How:   bcrypt via passlib (run in the threadpool, it is deliberately slow),
       PyJWT for tokens, the Store for persistence.

Flows:
    register: validate presence → hash → INSERT (unique index decides conflicts)
    login:    validate presence → SELECT by lowercased email → verify → sign token
    verify:   decode + check expiry → claims or None
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from starlette.concurrency import run_in_threadpool

from brandagent.config import Settings
from brandagent.database import Store
from brandagent.exceptions import (
    AuthError,
    ConflictError,
    InternalError,
    ValidationError,
)
from brandagent.models.user import User
from brandagent.schemas.auth import LoginResponse
from brandagent.security import (
    build_password_context,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "jobseeker"


class AuthService:
    """
    Credential and token operations bound to one application's settings.

    Built once by create_app() (the signing secret and bcrypt cost come from
    Settings) and shared by every request through app.state.
    """

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.token_ttl = timedelta(hours=settings.jwt_expires_hours)
        self.pwd_context = build_password_context(settings.bcrypt_rounds)

    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(hash_password, self.pwd_context, password)

    async def verify_password(self, password: str, hashed: str) -> bool:
        return await run_in_threadpool(verify_password, self.pwd_context, password, hashed)

    async def register(
        self,
        store: Store,
        email: Optional[str],
        password: Optional[str],
        role: Optional[str] = None,
    ) -> User:
        """
        Create a user.

        Raises:
            ValidationError: email or password missing/empty, or a password
                             bcrypt refuses (NUL byte)
            ConflictError:   email already registered (any case)
            InternalError:   any other store failure
        """
        if not email or not password:
            raise ValidationError(message="missing email/password")

        normalized_email = email.lower()
        try:
            hashed = await self.hash_password(password)
        except ValueError:
            # passlib's PasswordValueError, e.g. a NUL byte bcrypt cannot hash
            raise ValidationError(message="invalid password", field="password")
        user = User(email=normalized_email, password_hash=hashed, role=role or DEFAULT_ROLE)

        try:
            async with store.session() as session:
                session.add(user)
                await session.flush()
        except IntegrityError:
            logger.info("Registration rejected, email exists: %s", normalized_email)
            raise ConflictError(message="user exists", context={"email": normalized_email})
        except Exception as e:
            logger.error("Store error registering %s: %s", normalized_email, str(e), exc_info=True)
            raise InternalError(context={"error_type": type(e).__name__})

        logger.info("User registered: id=%s email=%s role=%s", user.id, user.email, user.role)
        return user

    async def login(
        self,
        store: Store,
        email: Optional[str],
        password: Optional[str],
    ) -> LoginResponse:
        """
        Check credentials and issue a session token.

        Raises:
            ValidationError: email or password missing/empty
            AuthError:       "no user" or "wrong password"
            InternalError:   store failure
        """
        if not email or not password:
            raise ValidationError(message="missing")

        normalized_email = email.lower()
        try:
            async with store.session() as session:
                result = await session.execute(select(User).where(User.email == normalized_email))
                user = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Store error during login for %s: %s", normalized_email, str(e), exc_info=True)
            raise InternalError(context={"error_type": type(e).__name__})

        if user is None:
            logger.warning("Login failed, no such user: %s", normalized_email)
            raise AuthError(message="no user")

        if not await self.verify_password(password, user.password_hash):
            logger.warning("Login failed, wrong password: %s", normalized_email)
            raise AuthError(message="wrong password")

        token = self.issue_token(user)
        logger.info("Login succeeded: id=%s role=%s", user.id, user.role)
        return LoginResponse(token=token, role=user.role)

    def issue_token(self, user: User) -> str:
        claims = {"id": user.id, "email": user.email, "role": user.role}
        return create_access_token(
            claims,
            self.secret,
            algorithm=self.algorithm,
            expires_delta=self.token_ttl,
        )

    def verify_token(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Decoded claims, or None when the token is missing, forged, malformed or expired."""
        return decode_access_token(token, self.secret, algorithm=self.algorithm)

