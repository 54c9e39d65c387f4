"""
User account model.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from hotelms.models.base import BaseModel, TimestampMixin, UserRole, enum_column

if TYPE_CHECKING:
    from hotelms.models.booking.booking import Booking
    from hotelms.models.user.guest_profile import GuestProfile

__all__ = ["User"]


class User(TimestampMixin, BaseModel):
    """Registered account. Passwords are stored only as bcrypt hashes."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole, "user_role"),
        nullable=False,
        default=UserRole.USER,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    bookings: Mapped[List["Booking"]] = relationship(
        "Booking",
        back_populates="user",
        passive_deletes="all",
    )
    guest_profile: Mapped[Optional["GuestProfile"]] = relationship(
        "GuestProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @validates("email")
    def _normalise_email(self, key, value: str) -> str:
        return value.strip().lower()

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value if self.role else '?'})>"
