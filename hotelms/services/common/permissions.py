# hotelms/services/common/permissions.py
"""
Permission and authorization utilities.

Every protected operation is evaluated once through :func:`authorize`,
which resolves the caller's capability (admin, staff or owner) for a typed
:class:`Action` and returns an :class:`AccessDecision`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Set

from hotelms.models.base import UserRole

from .errors import AuthorizationError


class Action(str, Enum):
    """Operations guarded by the access control layer."""
    BOOKING_VIEW = "booking.view"
    BOOKING_CANCEL = "booking.cancel"
    BOOKING_LIST_ALL = "booking.list_all"
    BOOKING_UPDATE = "booking.update"
    BOOKING_UPDATE_STATUS = "booking.update_status"
    BOOKING_DELETE = "booking.delete"
    ROOM_MANAGE = "room.manage"
    GUEST_VIEW = "guest.view"
    GUEST_UPDATE = "guest.update"
    GUEST_DELETE = "guest.delete"
    DASHBOARD_VIEW = "dashboard.view"


class Capability(str, Enum):
    """How an allowed principal qualified for an action."""
    ADMIN = "admin"
    STAFF = "staff"
    OWNER = "owner"
    NONE = "none"


STAFF_ACTIONS: Set[Action] = {
    Action.BOOKING_VIEW,
    Action.BOOKING_CANCEL,
    Action.BOOKING_LIST_ALL,
    Action.BOOKING_UPDATE,
    Action.BOOKING_UPDATE_STATUS,
    Action.GUEST_VIEW,
    Action.GUEST_UPDATE,
    Action.DASHBOARD_VIEW,
}

PERMISSION_MATRIX: Mapping[UserRole, Set[Action]] = {
    UserRole.ADMIN: set(Action),
    UserRole.STAFF: STAFF_ACTIONS,
    UserRole.USER: set(),
}

# Actions an owner may perform on their own resource
OWNER_ACTIONS: Set[Action] = {Action.BOOKING_VIEW, Action.BOOKING_CANCEL}


class PermissionDenied(AuthorizationError):
    """Raised when a user lacks required permissions."""

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        role: Optional[UserRole] = None,
        required_permission: Optional[str] = None,
    ) -> None:
        super().__init__(message, required_permission=required_permission)
        self.user_id = user_id
        self.role = role


ForbiddenError = PermissionDenied


@dataclass(frozen=True)
class Principal:
    """
    Represents an authenticated user in the service layer.

    Built per request from a verified token and passed explicitly into
    every service call.

    Attributes:
        user_id: Unique identifier for the user
        role: User's role
        metadata: Optional additional user context (name, email)
    """
    user_id: str
    role: UserRole
    metadata: dict = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of one authorization check."""
    allowed: bool
    action: Action
    capability: Capability
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


def has_permission(principal: Principal, action: Action) -> bool:
    """Check if the principal's role grants ``action``."""
    return action in PERMISSION_MATRIX.get(principal.role, set())


def is_resource_owner(principal: Principal, resource_owner_id: Optional[str]) -> bool:
    """
    Check if principal owns a resource.

    Example:
        >>> if is_resource_owner(principal, booking.user_id):
        ...     # Allow access to own booking
    """
    return resource_owner_id is not None and str(principal.user_id) == str(resource_owner_id)


def authorize(
    principal: Principal,
    action: Action,
    *,
    owner_id: Optional[str] = None,
) -> AccessDecision:
    """
    Evaluate ``action`` for ``principal``.

    Role grants win over ownership so the decision reports the strongest
    capability. Ownership is only considered for actions in OWNER_ACTIONS.
    """
    if has_permission(principal, action):
        capability = Capability.ADMIN if principal.is_admin else Capability.STAFF
        return AccessDecision(True, action, capability)

    if action in OWNER_ACTIONS and is_resource_owner(principal, owner_id):
        return AccessDecision(True, action, Capability.OWNER)

    return AccessDecision(
        False,
        action,
        Capability.NONE,
        reason=f"Role '{principal.role.value}' is not allowed to perform '{action.value}'",
    )


def require(
    principal: Principal,
    action: Action,
    *,
    owner_id: Optional[str] = None,
    error_message: Optional[str] = None,
) -> AccessDecision:
    """
    Authorize ``action`` or raise.

    Raises:
        PermissionDenied: If the decision is a deny
    """
    decision = authorize(principal, action, owner_id=owner_id)
    if not decision.allowed:
        raise PermissionDenied(
            error_message or "You do not have permission to perform this action",
            user_id=principal.user_id,
            role=principal.role,
            required_permission=action.value,
        )
    return decision

