"""
BrandAgent Backend - Auth Request/Response Schemas
====================================================

What:  Pydantic models for POST /api/register and POST /api/login.
Why optional request fields: a missing email or password is a business-rule
    failure answered with 400 {"error": "missing ..."}, not FastAPI's 422.
    The service checks presence; pydantic only checks JSON types.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    email: Optional[str] = Field(default=None, description="Account email (stored lowercased)")
    password: Optional[str] = Field(default=None, description="Plaintext password")
    role: Optional[str] = Field(
        default=None,
        description="employer, jobseeker or admin; defaults to jobseeker",
    )


class LoginRequest(BaseModel):
    email: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)


class OkResponse(BaseModel):
    ok: bool = True


class LoginResponse(BaseModel):
    """Signed bearer token plus the role, so the frontend can route the user."""
    token: str = Field(description="JWT to send as `Authorization: Bearer <token>`")
    role: str
