# hotelms/services/common/__init__.py
"""
Shared service-layer infrastructure.

- **errors**: Service-layer exception hierarchy
- **permissions**: Principal, typed actions and the authorization decision
"""

from .errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    TransactionError,
    ValidationError,
)
from .permissions import (
    AccessDecision,
    Action,
    Capability,
    ForbiddenError,
    PermissionDenied,
    Principal,
    authorize,
    require,
)

__all__ = [
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "TransactionError",
    "PermissionDenied",
    "ForbiddenError",
    "Principal",
    "Action",
    "Capability",
    "AccessDecision",
    "authorize",
    "require",
]
