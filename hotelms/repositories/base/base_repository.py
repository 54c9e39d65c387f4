"""
Base repository with standardized CRUD operations.

Repositories never commit: the calling service owns the transaction
boundary and commits or rolls back as a unit.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hotelms.core.logging import get_logger
from hotelms.models.base import BaseModel
from hotelms.services.common.errors import ConflictError, NotFoundError

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository providing CRUD operations for one model.
    """

    resource_name: str = "Resource"

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add a new entity and flush it so generated values are available.

        Raises:
            ConflictError: If a unique constraint is violated
        """
        self.db.add(entity)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"{self.resource_name} already exists") from e

        logger.info(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """Find entity by ID."""
        if id is None:
            return None
        return self.db.get(self.model, str(id))

    def get_by_id(self, id: str) -> ModelType:
        """
        Get entity by ID or raise exception.

        Raises:
            NotFoundError: If entity not found
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise NotFoundError(self.resource_name, id)
        return entity

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        stmt = select(func.count()).select_from(self.model)
        for key, value in (criteria or {}).items():
            if hasattr(self.model, key):
                stmt = stmt.where(getattr(self.model, key) == value)
        return self.db.scalar(stmt) or 0

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Apply ``data`` to ``entity`` and flush.

        Keys that are not attributes of the model are ignored.
        """
        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"{self.resource_name} update conflicts with existing data") from e

        logger.info(f"Updated {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        """Hard delete entity."""
        entity_id = entity.id
        self.db.delete(entity)
        self.db.flush()
        logger.info(f"Deleted {self.model.__name__} with id: {entity_id}")
