"""
BrandAgent Backend - Auth Route Handlers
==========================================

What:  POST /api/register and POST /api/login.
How:   Thin handlers: parse body → AuthService → response model.
       Error responses come from the global exception handlers in main.py.
"""

import logging

from fastapi import APIRouter, Depends

from brandagent.database import Store, get_store
from brandagent.dependencies import get_auth_service
from brandagent.schemas.auth import LoginRequest, LoginResponse, OkResponse, RegisterRequest
from brandagent.schemas.common import ErrorResponse
from brandagent.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/register",
    response_model=OkResponse,
    responses={
        400: {"description": "Missing email/password, or user exists", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new account",
)
async def register(
    body: RegisterRequest,
    store: Store = Depends(get_store),
    auth_service: AuthService = Depends(get_auth_service),
) -> OkResponse:
    await auth_service.register(store, body.email, body.password, body.role)
    return OkResponse()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing email/password", "model": ErrorResponse},
        401: {"description": "No such user, or wrong password", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Exchange credentials for a bearer token",
    description="Returns a signed token valid for 24 hours (configurable) and the user's role.",
)
async def login(
    body: LoginRequest,
    store: Store = Depends(get_store),
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    return await auth_service.login(store, body.email, body.password)
