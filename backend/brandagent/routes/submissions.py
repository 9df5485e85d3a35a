"""
BrandAgent Backend - Submission Route Handlers
================================================

What:  POST /api/submit (open to anyone) and GET /api/submissions (admin only).

Body handling for /api/submit:
    The whole JSON body is the payload, whatever its shape. An empty body,
    or one sent with a non-JSON content type, is stored as {}.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from brandagent.database import Store, get_store
from brandagent.dependencies import require_admin
from brandagent.schemas.common import ErrorResponse
from brandagent.schemas.submission import SubmissionItem, SubmitResponse
from brandagent.services.submission_service import submission_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Submissions"])


@router.post(
    "/submit",
    response_model=SubmitResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Store an arbitrary JSON payload",
)
async def submit(
    payload: Any = Body(default=None),
    store: Store = Depends(get_store),
) -> SubmitResponse:
    if payload is None or isinstance(payload, (bytes, bytearray)):
        payload = {}
    submission_id = await submission_service.submit(store, payload)
    return SubmitResponse(id=submission_id)


@router.get(
    "/submissions",
    response_model=List[SubmissionItem],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Token is not an admin's", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List every submission, newest first (admin only)",
)
async def list_submissions(
    claims: Dict[str, Any] = Depends(require_admin),
    store: Store = Depends(get_store),
) -> List[SubmissionItem]:
    return await submission_service.list_submissions(store)
