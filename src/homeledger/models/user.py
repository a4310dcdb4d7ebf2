"""User model supporting authentication and family membership."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .family import Family


class User(SQLModel, table=True):
    """Application user; every user belongs to exactly one family."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    email: str = Field(default="", max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
    family_id: int = Field(foreign_key="family.id", nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    last_login: Optional[datetime] = Field(default=None)

    family: "Family" = Relationship(
        sa_relationship=relationship("Family", back_populates="members"),
    )
