"""
BrandAgent Backend - User SQLAlchemy Model
============================================

What:  ORM model for the `users` table.
How:   Column names match the brand.db table written by earlier releases
       (`password` holds the bcrypt hash), so an existing brand.db keeps working.

Table Design:
    - INTEGER PRIMARY KEY: SQLite rowid alias, assigned on insert
    - email UNIQUE: the only uniqueness rule; duplicate registration is
      rejected here, not by a read-then-write check in Python
    - role: open string (employer, jobseeker, admin are the seeded values)
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from brandagent.database import Base


class User(Base):
    """A registered or seeded account. Never updated or deleted."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Always stored lowercased by the auth service
    email: Mapped[str] = mapped_column(Text, unique=True)

    password_hash: Mapped[str] = mapped_column("password", Text)

    role: Mapped[str] = mapped_column(Text, default="jobseeker")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
