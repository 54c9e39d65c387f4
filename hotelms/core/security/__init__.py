"""Security module for authentication primitives."""

from .jwt_handler import JWTManager, build_jwt_manager
from .password_hasher import PasswordHasher

__all__ = [
    "JWTManager",
    "build_jwt_manager",
    "PasswordHasher",
]
