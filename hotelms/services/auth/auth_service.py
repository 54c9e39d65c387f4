"""
Account registration, login and token resolution.
"""

from typing import Tuple

import jwt
from sqlalchemy.orm import Session

from hotelms.core.logging import get_audit_logger
from hotelms.core.security import JWTManager, PasswordHasher
from hotelms.models.base import UserRole
from hotelms.models.user import User
from hotelms.repositories.user import UserRepository
from hotelms.schemas.auth import LoginRequest, RegisterRequest
from hotelms.services.base import BaseService
from hotelms.services.common.errors import AuthenticationError, ConflictError
from hotelms.services.common.permissions import Principal

audit = get_audit_logger()


class AuthService(BaseService[User, UserRepository]):
    """
    Authentication service.

    Registration always yields a ``user`` account; administrators come from
    seeding.
    """

    def __init__(self, db_session: Session, password_hasher: PasswordHasher, jwt_manager: JWTManager):
        super().__init__(UserRepository(db_session), db_session)
        self.password_hasher = password_hasher
        self.jwt_manager = jwt_manager

    def register(self, data: RegisterRequest) -> User:
        """
        Create a new account.

        Raises:
            ConflictError: Email already registered
        """
        with self.transaction():
            if self.repository.find_by_email(data.email) is not None:
                raise ConflictError("User with this email already exists", conflicting_field="email")
            user = self.repository.create(
                User(
                    name=data.name,
                    email=data.email,
                    hashed_password=self.password_hasher.hash(data.password),
                    role=UserRole.USER,
                )
            )

        audit.info("user_registered", user_id=user.id, email=user.email)
        return user

    def authenticate(self, data: LoginRequest) -> Tuple[User, str]:
        """
        Verify credentials and issue an access token.

        The same error is raised for an unknown email and a wrong password.

        Raises:
            AuthenticationError: Invalid credentials or inactive account
        """
        user = self.repository.find_by_email(data.email)
        if user is None or not self.password_hasher.verify(data.password, user.hashed_password):
            self._logger.warning("Failed login attempt", extra={"email": data.email})
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("Account is disabled")

        token = self.create_token(user)
        audit.info("user_logged_in", user_id=user.id)
        return user, token

    def create_token(self, user: User) -> str:
        return self.jwt_manager.create_access_token(
            user.id,
            additional_claims={"email": user.email, "role": user.role.value},
        )

    def principal_from_token(self, token: str) -> Principal:
        """
        Resolve a bearer token to the calling principal.

        The role is read from the stored account rather than the token so a
        role change takes effect immediately.

        Raises:
            AuthenticationError: Invalid or expired token, unknown or inactive user
        """
        try:
            payload = self.jwt_manager.verify_token(token)
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid authentication token") from e

        user = self.repository.find_by_id(payload["user_id"])
        if user is None or not user.is_active:
            raise AuthenticationError("User not found or inactive")

        return Principal(
            user_id=user.id,
            role=user.role,
            metadata={"email": user.email, "name": user.name},
        )

    def get_profile(self, principal: Principal) -> User:
        return self.repository.get_by_id(principal.user_id)
