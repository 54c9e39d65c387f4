"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hotelms.core.logging import get_logger
from hotelms.repositories.base.base_repository import BaseRepository
from hotelms.services.common.errors import ConflictError, ServiceError, TransactionError

TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(Generic[TModel, TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction boundary with rollback on any failure
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Primary repository for the service's aggregate
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__module__).add_context(service=self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Run the block as one database transaction.

        Commits on success. Any exception rolls back; business errors
        propagate unchanged, database errors are logged first.

        Example:
            with self.transaction():
                self.repository.create(entity)
        """
        try:
            yield self.db
            self._commit()
        except ServiceError:
            self._rollback()
            raise
        except Exception as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise

    def _commit(self) -> None:
        """Commit, translating unique/foreign key violations into conflicts."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self._rollback()
            self._logger.warning(f"Integrity error on commit: {e.orig}")
            raise ConflictError("Operation conflicts with existing data") from e
        except SQLAlchemyError as e:
            self._rollback()
            raise TransactionError("Failed to commit transaction", e) from e

    def _rollback(self) -> None:
        """Rollback the current transaction, logging rollback errors."""
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            self._logger.warning(f"Rollback failed: {e}")
