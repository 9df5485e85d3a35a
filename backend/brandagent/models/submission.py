"""
BrandAgent Backend - Submission SQLAlchemy Model
==================================================

What:  ORM model for the `submissions` table.
Why opaque TEXT payload: the submit endpoint accepts any JSON shape, so the
    storage schema does not know about it. Consumers parse `data` themselves.
Why TEXT timestamp: keeps the ISO-8601 string exactly as issued
    (`2024-01-15T12:00:00.000Z`) and matches the existing brand.db column.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from brandagent.database import Base


class Submission(Base):
    """A stored JSON payload. Never updated or deleted."""

    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    data: Mapped[str] = mapped_column(Text)

    created_at: Mapped[str] = mapped_column("createdAt", Text)

    def __repr__(self) -> str:
        return f"<Submission(id={self.id}, created_at='{self.created_at}')>"
