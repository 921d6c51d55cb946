"""
Base repository with the CRUD plumbing shared by every entity.

Writes commit immediately; on SQLAlchemyError the session is rolled
back and the error re-raised for the service layer to translate.
"""

import logging
from typing import TypeVar, Generic, Optional, List
from abc import ABC, abstractmethod

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from github_dashboard.db_base import Base

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T], ABC):
    """Generic repository over a single model class."""

    def __init__(self, db_session: Session):
        self.db_session = db_session
        self._model_class = self._get_model_class()

    @abstractmethod
    def _get_model_class(self) -> type[T]:
        """Return the SQLAlchemy model class for this repository."""
        pass

    def _query(self):
        return self.db_session.query(self._model_class)

    def get_by_id(self, entity_id: str) -> Optional[T]:
        return self._query().filter(self._model_class.id == entity_id).first()

    def get_all(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[T]:
        query = self._query()
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return query.all()

    def count(self) -> int:
        return self._query().count()

    def exists(self, entity_id: str) -> bool:
        return self.get_by_id(entity_id) is not None

    def create(self, entity_data: dict) -> T:
        """
        Create and persist a new entity.

        Args:
            entity_data: Column values keyed by attribute name

        Returns:
            The refreshed entity
        """
        entity = self._model_class(**entity_data)
        self.db_session.add(entity)
        self._commit(entity, "create")
        return entity

    def update(self, entity_id: str, entity_data: dict) -> Optional[T]:
        """
        Apply entity_data to an existing entity.

        Returns:
            Updated entity if found, None otherwise
        """
        entity = self.get_by_id(entity_id)
        if not entity:
            return None

        for key, value in entity_data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)

        self._commit(entity, "update")
        return entity

    def delete(self, entity_id: str) -> bool:
        """
        Delete entity by id.

        Returns:
            True if deleted, False if not found
        """
        entity = self.get_by_id(entity_id)
        if not entity:
            return False
        self.delete_entity(entity)
        return True

    def delete_entity(self, entity: T) -> None:
        entity_id = getattr(entity, "id", None)
        try:
            self.db_session.delete(entity)
            self.db_session.commit()
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error(
                "Failed to delete entity",
                extra={
                    "entity_id": entity_id,
                    "entity_type": self._model_class.__name__,
                    "error": str(e),
                },
            )
            raise

        logger.info(
            "Entity deleted",
            extra={"entity_id": entity_id, "entity_type": self._model_class.__name__},
        )

    def _commit(self, entity: T, operation: str) -> None:
        try:
            self.db_session.commit()
            self.db_session.refresh(entity)
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error(
                f"Failed to {operation} entity",
                extra={
                    "entity_type": self._model_class.__name__,
                    "error": str(e),
                },
            )
            raise

        logger.info(
            f"Entity {operation}d",
            extra={
                "entity_id": getattr(entity, "id", None),
                "entity_type": self._model_class.__name__,
            },
        )
