"""
User Model

Core identity entity with authentication and role management.
"""

import uuid

from sqlalchemy import Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.models.enums import UserRole
from app.models.mixins import TimestampMixin


class User(TimestampMixin, Base):
    """
    User model representing creators and supporters.

    Attributes:
        id: UUID primary key for public-facing identification.
        email: Unique email address, stored lower-cased.
        name: Display name.
        password_hash: bcrypt hash (never serialized).
        role: CREATOR or SUPPORTER.
        avatar_url: Profile picture URL, empty string when unset.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            values_callable=lambda e: [member.value for member in e],
        ),
        default=UserRole.SUPPORTER,
        nullable=False,
        index=True,
    )
    avatar_url: Mapped[str] = mapped_column(
        String(512),
        default="",
        nullable=False,
    )

    @property
    def is_creator(self) -> bool:
        return self.role == UserRole.CREATOR

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
