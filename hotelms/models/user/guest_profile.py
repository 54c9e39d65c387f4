"""
Guest profile attached to a user account.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelms.models.base import BaseModel, IdentityType, TimestampMixin, enum_column

if TYPE_CHECKING:
    from hotelms.models.user.user import User

__all__ = ["GuestProfile"]


class GuestProfile(TimestampMixin, BaseModel):
    """
    Contact and identity details of a guest.

    Created lazily on the first booking of a user, or explicitly through
    the profile endpoint. ``vip`` and ``notes`` are staff-maintained.
    """

    __tablename__ = "guest_profiles"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    address: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    identity_type: Mapped[Optional[IdentityType]] = mapped_column(
        enum_column(IdentityType, "identity_type"),
        nullable=True,
    )
    identity_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    preferences: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    vip: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="guest_profile", lazy="joined")
