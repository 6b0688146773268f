"""Staff user model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from eventcare.db.base import Base, TimestampMixin
from eventcare.policy.roles import Role

# Persisted name of the role enum
UserRole = Role


class User(Base, TimestampMixin):
    """Field staff or administrator account."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        String(50),
        default=UserRole.EMT.value,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    certification_end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    region: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    @property
    def user_role(self) -> UserRole:
        """Role as the enum, whatever the storage layer handed back."""
        return UserRole(self.role)

    @property
    def is_admin(self) -> bool:
        return self.user_role is UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
