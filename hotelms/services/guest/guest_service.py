"""
Guest profiles: self-service for guests, administration for staff.
"""

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from hotelms.core.logging import get_audit_logger
from hotelms.models.user import GuestProfile
from hotelms.repositories.user import GuestProfileRepository, UserRepository
from hotelms.schemas.guest import GuestAdminUpdate, GuestProfileUpdate
from hotelms.services.base import BaseService
from hotelms.services.common.errors import NotFoundError
from hotelms.services.common.permissions import Action, Principal, require

audit = get_audit_logger()


def merge_address(current: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """Key-wise merge; parts missing from ``update`` keep their old value."""
    merged = dict(current or {})
    merged.update({k: v for k, v in update.items() if v is not None})
    return merged


class GuestService(BaseService[GuestProfile, GuestProfileRepository]):
    """Guest profile operations."""

    def __init__(self, db_session: Session):
        super().__init__(GuestProfileRepository(db_session), db_session)
        self.users = UserRepository(db_session)

    def _apply(self, profile: GuestProfile, changes: Dict[str, Any]) -> GuestProfile:
        address = changes.pop("address", None)
        if address is not None:
            profile.address = merge_address(profile.address, address)
        return self.repository.update(profile, {k: v for k, v in changes.items() if v is not None})

    # ==================== Self-service ====================

    def get_my_profile(self, principal: Principal) -> GuestProfile:
        profile = self.repository.find_by_user_id(principal.user_id)
        if profile is None:
            raise NotFoundError("Guest profile", principal.user_id)
        return profile

    def upsert_my_profile(self, principal: Principal, data: GuestProfileUpdate) -> GuestProfile:
        """Create the caller's profile or merge ``data`` into it."""
        changes = data.model_dump(exclude_unset=True)

        with self.transaction():
            profile = self.repository.find_by_user_id(principal.user_id)
            if profile is None:
                user = self.users.get_by_id(principal.user_id)
                profile = self.repository.create(
                    GuestProfile(
                        user_id=user.id,
                        full_name=changes.get("full_name") or user.name,
                        email=user.email,
                    )
                )
            profile = self._apply(profile, changes)

        audit.info("guest_profile_saved", guest_id=profile.id, user_id=principal.user_id)
        return profile

    # ==================== Administration ====================

    def list_guests(self, principal: Principal) -> List[GuestProfile]:
        require(principal, Action.GUEST_VIEW)
        return self.repository.list_profiles()

    def get_guest(self, principal: Principal, guest_id: str) -> GuestProfile:
        require(principal, Action.GUEST_VIEW)
        return self.repository.get_by_id(guest_id)

    def update_guest(self, principal: Principal, guest_id: str, data: GuestAdminUpdate) -> GuestProfile:
        require(principal, Action.GUEST_UPDATE)
        changes = data.model_dump(exclude_unset=True)

        with self.transaction():
            profile = self._apply(self.repository.get_by_id(guest_id), changes)

        audit.info("guest_profile_updated", guest_id=profile.id, fields=sorted(changes), updated_by=principal.user_id)
        return profile

    def delete_guest(self, principal: Principal, guest_id: str) -> None:
        require(principal, Action.GUEST_DELETE)

        with self.transaction():
            self.repository.delete(self.repository.get_by_id(guest_id))

        audit.info("guest_profile_deleted", guest_id=guest_id, deleted_by=principal.user_id)
