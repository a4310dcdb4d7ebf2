"""Family (sharing group) model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class Family(SQLModel, table=True):
    """Group of users sharing budgets and transactions."""

    __tablename__: ClassVar[str] = "family"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    members: list["User"] = Relationship(
        sa_relationship=relationship("User", back_populates="family"),
    )
