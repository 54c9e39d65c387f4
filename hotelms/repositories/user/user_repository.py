"""
User and guest profile repositories.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hotelms.models.user import GuestProfile, User
from hotelms.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access for user accounts."""

    resource_name = "User"

    def __init__(self, db: Session):
        super().__init__(User, db)

    def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.db.scalars(stmt).first()


class GuestProfileRepository(BaseRepository[GuestProfile]):
    """Data access for guest profiles."""

    resource_name = "Guest"

    def __init__(self, db: Session):
        super().__init__(GuestProfile, db)

    def find_by_user_id(self, user_id: str) -> Optional[GuestProfile]:
        stmt = select(GuestProfile).where(GuestProfile.user_id == str(user_id))
        return self.db.scalars(stmt).unique().first()

    def list_profiles(self) -> List[GuestProfile]:
        stmt = select(GuestProfile).order_by(GuestProfile.full_name)
        return list(self.db.scalars(stmt).unique())
