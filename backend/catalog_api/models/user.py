"""
Catalog API — User SQLAlchemy Model
=====================================

What:  ORM model representing the `users` table (the credential store).
Who:   Used by UserService for registration and login, and by the seed command.

Table Design:
    - email is unique and stored lowercase (normalized by the input schema)
    - password_hash holds a bcrypt hash (salt embedded); the plain password
      is never persisted
    - Users are never updated or deleted through the API
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.database import Base


class User(Base):
    """A registered API user."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Unique index doubles as the race-free uniqueness check on insert
    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
        comment="Lowercased login email address",
    )

    # bcrypt output is 60 chars; never included in any response schema
    password_hash: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        # The hash is kept out of reprs so it never lands in logs
        return f"<User(id={self.id}, email='{self.email}')>"
