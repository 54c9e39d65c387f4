"""Database initialization utilities."""
import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from hotelms.config.settings import Settings
from hotelms.core.security import PasswordHasher
from hotelms.db.base import Base
from hotelms.models.base import UserRole
from hotelms.models.user import User

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Create all tables that do not exist yet.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialized with {len(Base.metadata.tables)} tables")


def drop_db(engine: Engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def seed_first_admin(
    db: Session,
    config: Settings,
    password_hasher: Optional[PasswordHasher] = None,
) -> Optional[User]:
    """
    Create the administrator configured by FIRST_ADMIN_EMAIL/PASSWORD.

    Existing accounts are left untouched. Returns the admin user, or None
    when seeding is not configured.
    """
    if not (config.FIRST_ADMIN_EMAIL and config.FIRST_ADMIN_PASSWORD):
        return None

    email = config.FIRST_ADMIN_EMAIL.strip().lower()
    existing = db.query(User).filter(User.email == email).first()
    if existing is not None:
        db.rollback()
        return existing

    hasher = password_hasher or PasswordHasher(rounds=config.PASSWORD_BCRYPT_ROUNDS)
    admin = User(
        name=config.FIRST_ADMIN_NAME,
        email=email,
        hashed_password=hasher.hash(config.FIRST_ADMIN_PASSWORD),
        role=UserRole.ADMIN,
    )
    db.add(admin)
    db.commit()
    logger.info(f"Seeded administrator account {email}")
    return admin
