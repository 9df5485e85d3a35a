"""
BrandAgent Backend - Request Dependencies
===========================================

What:  FastAPI dependencies for the services attached to app.state and for
       bearer-token role checks.
How:   `role_required("admin")` builds a dependency that reads the
       Authorization header, verifies the token and checks the role claim.
       Failures raise AuthError (401) or ForbiddenError (403); the global
       handlers in main.py turn those into JSON responses.

Header parsing:
    The token is the second space-separated field of the header
    ("Bearer <token>"). A missing header or a header with one field means
    "no token", which is answered the same way as a bad token.
"""

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Header, Request

from brandagent.exceptions import AuthError, ForbiddenError
from brandagent.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Second field of "Bearer <token>", or None."""
    parts = (authorization or "").split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def get_current_claims(
    authorization: Optional[str] = Header(default=None),
    auth_service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Verified token claims; AuthError("unauthorized") otherwise."""
    claims = auth_service.verify_token(extract_bearer_token(authorization))
    if claims is None:
        raise AuthError(message="unauthorized")
    return claims


def role_required(*allowed_roles: str) -> Callable[..., Dict[str, Any]]:
    """
    Dependency factory for role-based access control.

    Usage: Depends(role_required("admin"))
    """

    def _checker(claims: Dict[str, Any] = Depends(get_current_claims)) -> Dict[str, Any]:
        if claims.get("role") not in allowed_roles:
            logger.warning(
                "Forbidden: user id=%s role=%s needs one of %s",
                claims.get("id"),
                claims.get("role"),
                allowed_roles,
            )
            raise ForbiddenError(message="forbidden", required_role=",".join(allowed_roles))
        return claims

    return _checker


require_admin = role_required("admin")
