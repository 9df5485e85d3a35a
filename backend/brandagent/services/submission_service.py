"""
BrandAgent Backend - Submission Service
=========================================

What:  Stores arbitrary JSON payloads and lists them for admins.
Why:   The payload is opaque at the storage boundary; it is serialized once
       here and handed back as the same string.

Query plan (list):
    SELECT id, data, createdAt FROM submissions ORDER BY id DESC
    → rowid order, newest first; no pagination
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import desc, select

from brandagent.database import Store
from brandagent.exceptions import InternalError, ValidationError
from brandagent.models.submission import Submission
from brandagent.schemas.submission import SubmissionItem

logger = logging.getLogger(__name__)


def serialize_payload(payload: Any) -> str:
    """
    Compact JSON, same shape as JavaScript's JSON.stringify output.

    NaN and Infinity are refused with ValueError: the request parser lets
    them through, but the stored string must stay valid JSON.
    """
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SubmissionService:
    """Stateless; receives the Store on every call."""

    async def submit(self, store: Store, payload: Any) -> int:
        """
        Persist a payload and return its new id.

        No size limit or deduplication. A payload that cannot be written as
        strict JSON raises ValidationError; any store failure is wrapped in
        InternalError.
        """
        try:
            data = serialize_payload(payload)
        except ValueError:
            raise ValidationError(message="invalid request body")

        submission = Submission(data=data, created_at=utc_timestamp())
        try:
            async with store.session() as session:
                session.add(submission)
                await session.flush()
        except Exception as e:
            logger.error("Store error saving submission: %s", str(e), exc_info=True)
            raise InternalError(context={"error_type": type(e).__name__})

        logger.info("Submission stored: id=%s (%d bytes)", submission.id, len(submission.data))
        return submission.id

    async def list_submissions(self, store: Store) -> List[SubmissionItem]:
        """All submissions, newest (highest id) first."""
        try:
            async with store.session() as session:
                result = await session.execute(select(Submission).order_by(desc(Submission.id)))
                rows = list(result.scalars().all())
        except Exception as e:
            logger.error("Store error listing submissions: %s", str(e), exc_info=True)
            raise InternalError(context={"error_type": type(e).__name__})

        return [
            SubmissionItem(id=row.id, data=row.data, created_at=row.created_at)
            for row in rows
        ]


submission_service = SubmissionService()
