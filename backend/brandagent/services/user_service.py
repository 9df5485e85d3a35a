"""
BrandAgent Backend - User Service
===================================

What:  Admin user listing and idempotent demo-account seeding.

Seeding:
    Runs on every startup. Each demo account is inserted only if its email
    is absent, so restarts never duplicate or overwrite users (existing
    passwords are left alone).
"""

import logging
from typing import List

from sqlalchemy import desc, select

from brandagent.database import Store
from brandagent.exceptions import ConflictError, InternalError
from brandagent.models.user import User
from brandagent.schemas.user import UserItem
from brandagent.services.auth_service import AuthService

logger = logging.getLogger(__name__)

# (email, password, role)
DEMO_ACCOUNTS = [
    ("employer@gmail.com", "123456", "employer"),
    ("jobseeker@gmail.com", "123456", "jobseeker"),
    ("admin@brandagent.com", "admin123", "admin"),
]


class UserService:
    """Stateless; receives the Store on every call."""

    async def list_users(self, store: Store) -> List[UserItem]:
        """id, email and role of every user, highest id first. Never the hash."""
        try:
            async with store.session() as session:
                result = await session.execute(
                    select(User.id, User.email, User.role).order_by(desc(User.id))
                )
                rows = result.all()
        except Exception as e:
            logger.error("Store error listing users: %s", str(e), exc_info=True)
            raise InternalError(context={"error_type": type(e).__name__})

        return [UserItem(id=row.id, email=row.email, role=row.role) for row in rows]

    async def email_exists(self, store: Store, email: str) -> bool:
        async with store.session() as session:
            result = await session.execute(select(User.id).where(User.email == email.lower()))
            return result.scalar_one_or_none() is not None

    async def seed_demo_accounts(self, store: Store, auth_service: AuthService) -> int:
        """Insert missing demo accounts. Returns how many were inserted."""
        inserted = 0
        for email, password, role in DEMO_ACCOUNTS:
            if await self.email_exists(store, email):
                continue
            try:
                await auth_service.register(store, email, password, role)
            except ConflictError:
                # Another worker seeded it between the check and the insert
                continue
            inserted += 1
            logger.info("Inserted demo user %s", email)
        return inserted


user_service = UserService()
