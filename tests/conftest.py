"""
Shared fixtures: a throwaway SQLite database per test, seeded accounts and
rooms, and an API client bound to the same database.
"""
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from hotelms.config.settings import Settings
from hotelms.core.security import PasswordHasher, build_jwt_manager
from hotelms.db.init_db import drop_db, init_db
from hotelms.db.session import build_engine, build_session_factory, get_db
from hotelms.main import create_app
from hotelms.models import Room, User
from hotelms.models.base import RoomStatus, RoomType, UserRole
from hotelms.services.common.permissions import Principal

TODAY = date(2024, 5, 1)
PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'hotel_test.db'}",
        ENVIRONMENT="testing",
        JWT_SECRET_KEY="test-secret-key-for-hotelms-tests",
        PASSWORD_BCRYPT_ROUNDS=4,
        BOOKING_ALLOW_PAST_DATES=True,
        FIRST_ADMIN_EMAIL=None,
        FIRST_ADMIN_PASSWORD=None,
        LOG_LEVEL="WARNING",
        ENABLE_STRUCTURED_LOGGING=False,
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings.get_database_url(), settings)
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


class Seeder:
    """Creates committed rows and hands back plain identifiers."""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self.hasher = PasswordHasher(rounds=4)
        self._counter = 0

    def user(self, role: UserRole = UserRole.USER, email: str = None, name: str = "Guest") -> Principal:
        self._counter += 1
        email = email or f"{role.value}{self._counter}@example.com"
        with self.session_factory() as session:
            user = User(
                name=name,
                email=email,
                hashed_password=self.hasher.hash(PASSWORD),
                role=role,
            )
            session.add(user)
            session.commit()
            return Principal(user_id=user.id, role=role, metadata={"email": email})

    def room(
        self,
        room_number: str = "R101",
        price: str = "100.00",
        capacity: int = 2,
        room_type: RoomType = RoomType.DOUBLE,
        status: RoomStatus = RoomStatus.READY,
        is_available: bool = True,
    ) -> str:
        with self.session_factory() as session:
            room = Room(
                room_number=room_number,
                room_type=room_type,
                capacity=capacity,
                price_per_night=Decimal(price),
                status=status,
                is_available=is_available,
            )
            session.add(room)
            session.commit()
            return room.id


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)


@pytest.fixture
def guest(seed) -> Principal:
    return seed.user(UserRole.USER, email="guest@example.com", name="Alice Guest")


@pytest.fixture
def other_guest(seed) -> Principal:
    return seed.user(UserRole.USER, email="other@example.com", name="Bob Other")


@pytest.fixture
def admin(seed) -> Principal:
    return seed.user(UserRole.ADMIN, email="admin@example.com", name="Ada Admin")


@pytest.fixture
def staff(seed) -> Principal:
    return seed.user(UserRole.STAFF, email="staff@example.com", name="Sam Staff")


@pytest.fixture
def room_id(seed) -> str:
    return seed.room("R101", price="100.00", capacity=2)


# ==================== API ====================

@pytest.fixture
def app(settings, session_factory):
    app = create_app(settings)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers(settings):
    """Build an Authorization header for a seeded principal."""
    jwt_manager = build_jwt_manager(settings)

    def _headers(principal: Principal) -> dict:
        token = jwt_manager.create_access_token(
            principal.user_id,
            additional_claims={"role": principal.role.value},
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
